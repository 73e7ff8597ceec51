#!/usr/bin/env python3
"""Interactive collection and validation of the run configuration."""

from __future__ import annotations

import sys

from config import RunConfig
from logging_utils import Logger
from prompts import Prompter
from security import SecurityValidator
from utils import normalize_url

# Exit codes
EXIT_MISSING_ARGUMENTS = 2


def _prompt_values(prompter: type) -> tuple[str, str, str, str]:
    """Ask for the four required values, trimmed."""
    Logger.info("please provide the following information")
    username = prompter.ask("Enter your GitHub username:")
    gitlab_url = prompter.ask(
        "Enter your GitLab URL (e.g., https://gitlab.company.com):"
    )
    gitlab_repo = prompter.ask("Enter your GitLab target repository name:")
    token = prompter.ask_secret(
        "Enter your GitLab personal access token "
        "(needs api, read_repository and write_repository permissions):"
    )
    return username.strip(), gitlab_url.strip(), gitlab_repo.strip(), token.strip()


def _validate_values(
    username: str, gitlab_url: str, gitlab_repo: str
) -> tuple[str, str, str]:
    """Validate collected values; exit on the first invalid one."""
    if "://" not in gitlab_url:
        Logger.warn(f"no scheme in GitLab URL, assuming https://{gitlab_url}")
        gitlab_url = f"https://{gitlab_url}"

    try:
        validated_username = SecurityValidator.validate_username(username)
        validated_url = SecurityValidator.validate_url(gitlab_url, ["https", "http"])
        validated_repo = SecurityValidator.validate_repo_name(gitlab_repo)
    except ValueError as e:
        Logger.security_event(
            "CONFIG_VALIDATION_FAILED", f"configuration validation failed: {e}"
        )
        Logger.error(f"configuration validation error: {e}")
        sys.exit(EXIT_MISSING_ARGUMENTS)

    return validated_username, validated_url, validated_repo


def collect_run_config(prompter: type = Prompter) -> RunConfig:
    """Prompt for the run configuration and return it validated."""
    username, gitlab_url, gitlab_repo, token = _prompt_values(prompter)

    if not (username and gitlab_url and gitlab_repo and token):
        Logger.error("all fields are required")
        sys.exit(EXIT_MISSING_ARGUMENTS)

    Logger.register_secret(token)
    gitlab_url = normalize_url(gitlab_url)
    username, gitlab_url, gitlab_repo = _validate_values(
        username, gitlab_url, gitlab_repo
    )

    Logger.success("configuration complete")
    return RunConfig(
        github_username=username,
        gitlab_url=gitlab_url,
        gitlab_repo=gitlab_repo,
        gitlab_token=token,
    )
