#!/usr/bin/env python3
"""Security validation utilities for github-to-gitlab."""

import re
from typing import Iterable, List, Optional


class SecurityValidator:
    """Input validation and credential redaction."""

    MAX_REPO_NAME_LENGTH = 255
    MAX_URL_LENGTH = 2048
    MAX_USERNAME_LENGTH = 39  # GitHub login limit

    SAFE_REPO_NAME_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")
    SAFE_USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")

    # (pattern, replacement) pairs applied to everything that gets printed or logged
    REDACTIONS = [
        (r"(https?)://[^:/@\s]+:[^@\s]+@", r"\1://[REDACTED]@"),
        (r"private-token\s*[=:]\s*[^\s]+", "private-token=[REDACTED]"),
        (r"token\s*[=:]\s*[^\s]+", "token=[REDACTED]"),
        (r"password\s*[=:]\s*[^\s]+", "password=[REDACTED]"),
        (r"glpat-[A-Za-z0-9_-]+", "[GITLAB_TOKEN_REDACTED]"),
        (r"gh[pousr]_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),
    ]

    @staticmethod
    def _reject_control_chars(value: str, label: str) -> None:
        if "\x00" in value or any(ord(c) < 32 for c in value):
            raise ValueError(f"{label} contains null bytes or control characters")

    @classmethod
    def validate_repo_name(cls, name: str) -> str:
        """Validate a GitLab project path segment.

        Unlike a sanitizer this never rewrites the name: the project path and
        the name the user typed must stay identical.
        """
        if not name or not isinstance(name, str):
            raise ValueError("Repository name must be a non-empty string")

        if len(name) > cls.MAX_REPO_NAME_LENGTH:
            raise ValueError(
                f"Repository name exceeds maximum length of {cls.MAX_REPO_NAME_LENGTH}"
            )

        cls._reject_control_chars(name, "Repository name")

        if ".." in name or "/" in name or "\\" in name:
            raise ValueError("Repository name contains invalid path characters")

        if not cls.SAFE_REPO_NAME_PATTERN.match(name):
            raise ValueError("Repository name contains invalid characters")

        return name

    @classmethod
    def validate_username(cls, username: str) -> str:
        """Validate a GitHub username."""
        if not username or not isinstance(username, str):
            raise ValueError("Username must be a non-empty string")

        if len(username) > cls.MAX_USERNAME_LENGTH:
            raise ValueError(
                f"Username exceeds maximum length of {cls.MAX_USERNAME_LENGTH}"
            )

        cls._reject_control_chars(username, "Username")

        if not cls.SAFE_USERNAME_PATTERN.match(username):
            raise ValueError("Username contains invalid characters")

        return username

    @classmethod
    def validate_url(cls, url: str, allowed_schemes: Optional[List[str]] = None) -> str:
        """Validate a base URL of a hosting service."""
        if not url or not isinstance(url, str):
            raise ValueError("URL must be a non-empty string")

        if len(url) > cls.MAX_URL_LENGTH:
            raise ValueError(f"URL exceeds maximum length of {cls.MAX_URL_LENGTH}")

        cls._reject_control_chars(url, "URL")

        if any(c.isspace() for c in url):
            raise ValueError("URL contains whitespace")

        schemes = allowed_schemes or ["https", "http"]
        scheme, sep, rest = url.partition("://")
        if not sep or scheme.lower() not in schemes:
            raise ValueError(f"URL scheme must be one of: {schemes}")
        if not rest or rest.startswith("/"):
            raise ValueError("URL has no host")
        if "@" in rest.split("/", 1)[0]:
            raise ValueError("URL must not embed credentials")

        return url

    @classmethod
    def sanitize_for_logging(cls, message: str, secrets: Iterable[str] = ()) -> str:
        """Redact credentials from a message before it is shown or logged."""
        if not message:
            return message

        sanitized = str(message)
        for secret in secrets:
            if secret:
                sanitized = sanitized.replace(secret, "[REDACTED]")
        for pattern, replacement in cls.REDACTIONS:
            sanitized = re.sub(pattern, replacement, sanitized, flags=re.IGNORECASE)

        return sanitized
