#!/usr/bin/env python3
"""Thin wrapper over the git command line."""

from __future__ import annotations

import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

from logging_utils import Logger
from utils import run_tool

PathLike = Union[str, Path]

ASKPASS_USER_VAR = "GITHUB_TO_GITLAB_USER"
ASKPASS_PASSWORD_VAR = "GITHUB_TO_GITLAB_PASSWORD"

# An empty value clears helpers inherited from system and global config, so
# git cannot hand the token to a persistent store after a successful request
RESET_CREDENTIAL_HELPERS = "credential.helper="


def credential_store_overrides(store: PathLike) -> Tuple[str, ...]:
    """Config overrides limiting credential lookup and storage to ``store``."""
    return (RESET_CREDENTIAL_HELPERS, f'credential.helper=store --file="{store}"')


class GitClient:
    """Runs git commands; every failure raises subprocess.CalledProcessError."""

    def __init__(self, executable: str = "git", timeout: int = 600) -> None:
        self.executable = executable
        self.timeout = timeout

    def _env(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        env = os.environ.copy()
        # Never block on a credential prompt
        env["GIT_TERMINAL_PROMPT"] = "0"
        if extra:
            env.update(extra)
        return env

    def run(
        self,
        args: List[str],
        cwd: Optional[PathLike] = None,
        env: Optional[Dict[str, str]] = None,
        overrides: Sequence[str] = (),
        input: Optional[str] = None,
    ):
        """Run git; each override is passed as a per-command ``-c key=value``."""
        config_args: List[str] = []
        for override in overrides:
            config_args += ["-c", override]
        return run_tool(
            [self.executable, *config_args, *args],
            cwd=cwd,
            env=self._env(env),
            timeout=self.timeout,
            input=input,
        )

    def clone(
        self,
        url: str,
        dest: PathLike,
        env: Optional[Dict[str, str]] = None,
        overrides: Sequence[str] = (),
    ) -> None:
        self.run(["clone", url, str(dest)], env=env, overrides=overrides)

    def init(self, path: PathLike) -> None:
        self.run(["init"], cwd=path)

    def set_config(self, path: PathLike, key: str, value: str) -> None:
        self.run(["config", key, value], cwd=path)

    def add(self, path: PathLike, pathspec: str) -> None:
        self.run(["add", pathspec], cwd=path)

    def unstage(self, path: PathLike, pathspec: str) -> None:
        self.run(["reset", "-q", "--", pathspec], cwd=path)

    def commit(self, path: PathLike, message: str) -> None:
        self.run(["commit", "-m", message], cwd=path)

    def rename_branch(self, path: PathLike, branch: str) -> None:
        self.run(["branch", "-M", branch], cwd=path)

    def add_remote(self, path: PathLike, name: str, url: str) -> None:
        self.run(["remote", "add", name, url], cwd=path)

    def push(
        self,
        path: PathLike,
        branch: str,
        force: bool = False,
        remote: str = "origin",
        overrides: Sequence[str] = (),
    ) -> None:
        args = ["push", "-u"]
        if force:
            args.append("-f")
        self.run([*args, remote, branch], cwd=path, overrides=overrides)

    @staticmethod
    @contextmanager
    def askpass(username: str, password: str) -> Iterator[Dict[str, str]]:
        """Yield environment overrides that answer git's credential prompts.

        The helper script only echoes environment variables, so the secret
        itself is never written to disk; the script is removed on exit.
        """
        fd, path = tempfile.mkstemp(prefix="gtg_askpass_", text=True)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as script:
                script.write("#!/bin/sh\n")
                script.write('case "$1" in\n')
                script.write(f'  *Username*) printf "%s\\n" "${ASKPASS_USER_VAR}" ;;\n')
                script.write(f'  *Password*) printf "%s\\n" "${ASKPASS_PASSWORD_VAR}" ;;\n')
                script.write("  *) exit 1 ;;\n")
                script.write("esac\n")
            os.chmod(path, 0o700)
            yield {
                "GIT_ASKPASS": path,
                ASKPASS_USER_VAR: username,
                ASKPASS_PASSWORD_VAR: password,
            }
        finally:
            try:
                os.remove(path)
            except OSError as error:
                Logger.warn(f"failed to clean up temporary credential helper: {error}")
