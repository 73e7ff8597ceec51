#!/usr/bin/env python3
"""GitHub API wrapper for listing a user's public repositories."""

from __future__ import annotations

import sys
from typing import List

import github
import requests

from config import GITHUB_API_URL, LIST_PAGE_SIZE
from logging_utils import Logger

# Exit codes
EXIT_GITHUB_ERROR = 31


class GitHubSource:
    """Read-only, unauthenticated view of a GitHub account."""

    def __init__(self, username: str, api_url: str = GITHUB_API_URL) -> None:
        self.username = username
        if api_url != GITHUB_API_URL:
            self.api = github.Github(base_url=api_url, per_page=LIST_PAGE_SIZE)
        else:
            self.api = github.Github(per_page=LIST_PAGE_SIZE)

    def list_public_repos(self) -> List[str]:
        """Return repository names from the first page of public repos.

        Only one page is requested; an account with more public repositories
        than fit on it only gets the first page migrated.
        """
        Logger.info(f"fetching repositories for GitHub user: {self.username}")
        try:
            user = self.api.get_user(self.username)
            page = user.get_repos(type="public").get_page(0)
            names = [repo.name for repo in page]
        except github.UnknownObjectException:
            names = []
        except github.GithubException as e:
            Logger.error(f"github error while listing repositories: {e}")
            sys.exit(EXIT_GITHUB_ERROR)
        except requests.RequestException as e:
            Logger.error(f"failed to contact github api: {e}")
            sys.exit(EXIT_GITHUB_ERROR)

        if not names:
            Logger.error(f"no public repositories found for user {self.username}")
            sys.exit(EXIT_GITHUB_ERROR)

        Logger.success(f"found {len(names)} public repositories")
        return names
