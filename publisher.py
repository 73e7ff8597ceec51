#!/usr/bin/env python3
"""Pushes the destination working copy with branch and force fallbacks."""

from __future__ import annotations

import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Sequence, Tuple

from config import CREDENTIALS_FILE, PushAttempt, RunConfig
from git_client import GitClient, credential_store_overrides
from logging_utils import Logger
from utils import TOOL_ERRORS, credential_url

# First success wins
PUSH_SEQUENCE: Tuple[PushAttempt, ...] = (
    PushAttempt("main"),
    PushAttempt("master"),
    PushAttempt("main", force=True),
    PushAttempt("master", force=True),
)


@contextmanager
def transient_credentials(path: Path, gitlab_url: str, token: str) -> Iterator[Path]:
    """Write a git credential-store file that exists only inside the block."""
    path = Path(path)
    fd = os.open(str(path), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(credential_url(gitlab_url, token) + "\n")
        # O_CREAT mode does not apply to a file that already existed
        os.chmod(path, 0o600)
        Logger.security_event("CREDENTIALS_WRITTEN", f"push credentials stored in {path}")
        yield path
    finally:
        try:
            os.remove(path)
            Logger.security_event("CREDENTIALS_REMOVED", f"removed {path}")
        except FileNotFoundError:
            pass
        except OSError as e:
            Logger.error(f"failed to remove credential file {path}: {e}")


class Publisher:
    """Publishes accumulated import commits to the GitLab remote."""

    def __init__(
        self,
        cfg: RunConfig,
        working_copy: Path,
        git: Optional[GitClient] = None,
        credentials_path: Path = CREDENTIALS_FILE,
    ) -> None:
        self.cfg = cfg
        self.working_copy = Path(working_copy)
        self.git = git or GitClient()
        self.credentials_path = Path(credentials_path)

    def publish(self) -> Optional[PushAttempt]:
        """Try each push in PUSH_SEQUENCE; None when all of them fail."""
        Logger.info("pushing all repositories to gitlab")
        with transient_credentials(
            self.credentials_path, self.cfg.gitlab_url, self.cfg.gitlab_token
        ) as store:
            return self._push_with_fallbacks(credential_store_overrides(store))

    def _push_with_fallbacks(self, overrides: Sequence[str]) -> Optional[PushAttempt]:
        for attempt in PUSH_SEQUENCE:
            label = f"{'force ' if attempt.force else ''}push to {attempt.branch}"
            try:
                self.git.push(
                    self.working_copy,
                    attempt.branch,
                    force=attempt.force,
                    overrides=overrides,
                )
            except TOOL_ERRORS:
                Logger.step(label, False)
                continue
            Logger.step(label, True)
            return attempt

        Logger.error("all push attempts failed! see log file for details")
        Logger.warn("you may need to manually push the repository")
        return None
