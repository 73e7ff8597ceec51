#!/usr/bin/env python3
"""Copies one source repository's files into the destination working copy."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from config import GITHUB_GIT_URL, IMPORT_ROOT, ImportResult
from git_client import GitClient
from logging_utils import Logger
from utils import TOOL_ERRORS, remove_tree, run_tool


class RepositoryImporter:
    """Clone, copy (without .git), stage and commit, one repository at a time.

    A failed step skips the remaining ones for that repository only; the
    scratch clone is always removed.
    """

    def __init__(
        self,
        github_username: str,
        working_copy: Path,
        temp_clone: Path,
        git: Optional[GitClient] = None,
        source_base_url: str = GITHUB_GIT_URL,
    ) -> None:
        self.github_username = github_username
        self.working_copy = Path(working_copy)
        self.temp_clone = Path(temp_clone)
        self.git = git or GitClient()
        self.source_base_url = source_base_url.rstrip("/")

    def source_url(self, name: str) -> str:
        return f"{self.source_base_url}/{self.github_username}/{name}.git"

    def target_dir(self, name: str) -> Path:
        return self.working_copy / IMPORT_ROOT / name

    def import_repo(self, name: str) -> ImportResult:
        remove_tree(self.temp_clone)
        try:
            success = (
                self._clone(name)
                and self._copy(name)
                and self._commit(name)
            )
        finally:
            remove_tree(self.temp_clone)

        if success:
            Logger.success(
                f"repository {name} has been added to the gitlab repository"
            )
        return ImportResult(name=name, success=success)

    def _clone(self, name: str) -> bool:
        try:
            self.git.clone(self.source_url(name), self.temp_clone)
        except TOOL_ERRORS:
            Logger.step(f"cloning {name} from github", False)
            return False
        Logger.step(f"cloning {name} from github", True)
        return True

    def _copy(self, name: str) -> bool:
        target = self.target_dir(name)
        try:
            target.mkdir(parents=True, exist_ok=True)
            run_tool(
                ["rsync", "-a", "--exclude=.git", f"{self.temp_clone}/", f"{target}/"]
            )
        except TOOL_ERRORS:
            Logger.step("copying repository content", False)
            return False
        Logger.step("copying repository content", True)
        return True

    def _commit(self, name: str) -> bool:
        pathspec = f"{IMPORT_ROOT}/{name}"
        try:
            self.git.add(self.working_copy, pathspec)
        except TOOL_ERRORS:
            Logger.step("adding files to gitlab repository", False)
            return False
        Logger.step("adding files to gitlab repository", True)

        message = f"Import GitHub repository: {name} from {self.github_username}"
        try:
            self.git.commit(self.working_copy, message)
        except TOOL_ERRORS:
            Logger.step("committing changes", False)
            self._unstage(pathspec)
            return False
        Logger.step("committing changes", True)
        return True

    def _unstage(self, pathspec: str) -> None:
        # Keep a failed import out of the next repository's commit
        try:
            self.git.unstage(self.working_copy, pathspec)
        except TOOL_ERRORS as e:
            Logger.warn(f"could not unstage {pathspec}: {e}")
