#!/usr/bin/env python3
"""GitLab API wrapper for provisioning the destination mirror repository."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, Union
from urllib.parse import quote

import gitlab
import requests

from config import (COMMIT_USER_EMAIL, COMMIT_USER_NAME, DEFAULT_BRANCH,
                    IMPORT_ROOT, INITIAL_COMMIT_MESSAGE, PROJECT_DESCRIPTION,
                    README_TEMPLATE, RunConfig)
from git_client import RESET_CREDENTIAL_HELPERS, GitClient
from logging_utils import Logger
from utils import TOOL_ERRORS, remove_tree

# Exit codes
EXIT_AUTH_ERROR = 40
EXIT_GITLAB_ERROR = 30


def render_readme(github_username: str) -> str:
    """README committed into a freshly initialized mirror."""
    return README_TEMPLATE.format(username=github_username, root=IMPORT_ROOT)


class GitLabTarget:
    """Finds or creates the mirror project and prepares its working copy."""

    def __init__(self, cfg: RunConfig, git: Optional[GitClient] = None) -> None:
        self.cfg = cfg
        self.url = cfg.gitlab_url
        self.token = cfg.gitlab_token
        self.git = git or GitClient()
        self.api: Optional[gitlab.Gitlab] = None

    def connect(self) -> None:
        Logger.info(f"init gitlab API: {self.url}")
        try:
            self.api = gitlab.Gitlab(url=self.url, private_token=self.token)
            self.api.auth()
        except gitlab.exceptions.GitlabAuthenticationError as e:
            Logger.error(f"authentication error (gitlab): {e}")
            sys.exit(EXIT_AUTH_ERROR)
        except Exception as e:
            Logger.error(f"failed to initialize gitlab API: {e}")
            sys.exit(EXIT_GITLAB_ERROR)

    def _require_api(self) -> gitlab.Gitlab:
        if self.api is None:
            Logger.error("gitlab API not initialized")
            sys.exit(EXIT_GITLAB_ERROR)
        return self.api

    def find_project(self, name: str) -> Optional[object]:
        """Return the project whose path is exactly ``name``, if any."""
        api = self._require_api()
        try:
            candidates = api.projects.list(
                search=name, membership=True, per_page=100, get_all=False
            )
        except gitlab.exceptions.GitlabListError as e:
            Logger.warn(f"project search failed for '{name}': {e}")
            return None
        for project in candidates:
            if getattr(project, "path", None) == name:
                return project
        return None

    def create_project(self, name: str) -> Optional[object]:
        """Create the project; a failure is reported and otherwise ignored."""
        api = self._require_api()
        try:
            project = api.projects.create(
                {"name": name, "path": name, "description": PROJECT_DESCRIPTION}
            )
        except gitlab.exceptions.GitlabCreateError as e:
            Logger.warn(f"failed to create gitlab repository '{name}': {e}")
            return None
        Logger.success(f"created gitlab repository: {name}")
        return project

    def ensure_project(self, name: str) -> Optional[object]:
        Logger.info(f"checking if gitlab repository exists: {name}")
        project = self.find_project(name)
        if project is not None:
            Logger.success(f"found gitlab repository: {name}")
            return project
        Logger.warn(f"gitlab repository not found, creating: {name}")
        return self.create_project(name)

    def has_content(self, project_ref: Union[int, str]) -> bool:
        """True when the repository tree endpoint answers 200."""
        ref = quote(str(project_ref), safe="")
        url = f"{self.url}/api/v4/projects/{ref}/repository/tree"
        try:
            response = requests.head(
                url, headers={"PRIVATE-TOKEN": self.token}, timeout=30
            )
        except requests.RequestException as e:
            Logger.warn(f"could not check repository content: {e}")
            return False
        Logger.debug(f"repository tree probe returned {response.status_code}")
        return response.status_code == 200

    def remote_url(self, project: Optional[object]) -> str:
        url = getattr(project, "http_url_to_repo", None) if project else None
        return url or f"{self.url}/{self.cfg.gitlab_repo}.git"

    def prepare_working_copy(self, working_copy: Path) -> str:
        """Clone or initialize the destination working copy.

        Returns the remote URL the working copy pushes to.
        """
        name = self.cfg.gitlab_repo
        Logger.info("setting up gitlab repository")
        project = self.ensure_project(name)
        remote = self.remote_url(project)

        if working_copy.exists():
            Logger.warn(f"removing leftover working copy: {working_copy}")
            remove_tree(working_copy)
        working_copy.parent.mkdir(parents=True, exist_ok=True)

        project_ref = getattr(project, "id", None) or name
        if self.has_content(project_ref):
            Logger.info("repository exists and has content, cloning it")
            self._clone_existing(remote, working_copy)
        else:
            Logger.info("repository is empty or new, initializing it")
            self._init_new(remote, working_copy)

        Logger.success("gitlab repository setup complete")
        return remote

    def _set_identity(self, working_copy: Path) -> None:
        self.git.set_config(working_copy, "user.name", COMMIT_USER_NAME)
        self.git.set_config(working_copy, "user.email", COMMIT_USER_EMAIL)

    def _clone_existing(self, remote: str, working_copy: Path) -> None:
        try:
            with self.git.askpass("oauth2", self.token) as env:
                self.git.clone(
                    remote,
                    working_copy,
                    env=env,
                    overrides=(RESET_CREDENTIAL_HELPERS,),
                )
            self._set_identity(working_copy)
        except TOOL_ERRORS as e:
            Logger.step("cloning existing gitlab repository", False)
            Logger.error(f"could not clone {remote}: {e}")
            sys.exit(EXIT_GITLAB_ERROR)
        Logger.step("cloning existing gitlab repository", True)

    def _init_new(self, remote: str, working_copy: Path) -> None:
        working_copy.mkdir(parents=True, exist_ok=True)
        readme = working_copy / "README.md"
        try:
            self.git.init(working_copy)
            self._set_identity(working_copy)
            readme.write_text(
                render_readme(self.cfg.github_username), encoding="utf-8"
            )
            self.git.add(working_copy, "README.md")
            self.git.commit(working_copy, INITIAL_COMMIT_MESSAGE)
            self.git.rename_branch(working_copy, DEFAULT_BRANCH)
            self.git.add_remote(working_copy, "origin", remote)
        except TOOL_ERRORS as e:
            Logger.step("initializing local repository", False)
            Logger.error(f"could not initialize working copy: {e}")
            sys.exit(EXIT_GITLAB_ERROR)
        Logger.step("initializing local repository", True)
