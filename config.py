#!/usr/bin/env python3
"""Configuration dataclasses and constants for github-to-gitlab."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

GITHUB_API_URL = "https://api.github.com"
GITHUB_GIT_URL = "https://github.com"

# One page of public repositories; accounts with more only see the first page
LIST_PAGE_SIZE = 100

SCRATCH_DIR_NAME = "temp_repos"
WORKING_COPY_NAME = "gitlab_repo"
TEMP_CLONE_NAME = "temp_clone"
IMPORT_ROOT = "github_repos"

LOG_FILE_PREFIX = "github_to_gitlab_"
CREDENTIALS_FILE = Path.home() / ".git-credentials-github-to-gitlab"

PROJECT_DESCRIPTION = (
    "GitHub Mirror Repository - Contains imported public repositories"
)
COMMIT_USER_NAME = "GitHub Mirror"
COMMIT_USER_EMAIL = "noreply@example.com"
INITIAL_COMMIT_MESSAGE = "Initial commit: Repository structure"
DEFAULT_BRANCH = "main"

README_TEMPLATE = """\
# GitHub Repository Mirror

This repository contains mirrored content from GitHub public repositories of user: {username}

## Description

A comprehensive collection of public GitHub repositories automatically migrated to GitLab. This mirror provides a secure backup and allows for seamless integration with your company's GitLab infrastructure.

## Structure

Each GitHub repository is stored in its own directory under `{root}/`:

```
{root}/
  ├── repo1/
  ├── repo2/
  └── repo3/
```
"""


@dataclass(frozen=True)
class RunConfig:
    """Values collected interactively at the start of a run."""
    github_username: str
    gitlab_url: str
    gitlab_repo: str
    gitlab_token: str


@dataclass(frozen=True)
class WorkspacePaths:
    """Local directories used during a run."""
    scratch_dir: Path
    working_copy: Path
    temp_clone: Path

    @classmethod
    def under(cls, base: Path) -> "WorkspacePaths":
        scratch = Path(base) / SCRATCH_DIR_NAME
        return cls(
            scratch_dir=scratch,
            working_copy=scratch / WORKING_COPY_NAME,
            temp_clone=scratch / TEMP_CLONE_NAME,
        )


@dataclass
class ImportResult:
    """Outcome of importing a single source repository."""
    name: str
    success: bool


@dataclass(frozen=True)
class PushAttempt:
    """A branch/force combination tried by the publisher."""
    branch: str
    force: bool = False
