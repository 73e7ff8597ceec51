#!/usr/bin/env python3
"""Utility functions for github-to-gitlab."""

import os
import shutil
import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union
from urllib.parse import urlparse

from logging_utils import Logger
from security import SecurityValidator

# Failures of an external tool invocation, including a missing executable
TOOL_ERRORS = (subprocess.CalledProcessError, subprocess.TimeoutExpired, OSError)


def normalize_url(url: str) -> str:
    """Strip exactly one trailing slash from a base URL."""
    if url.endswith("/"):
        return url[:-1]
    return url


def parse_selection(selection: str, repos: Sequence[str]) -> List[str]:
    """Resolve comma-separated 1-based ordinals against the listing.

    Ordinals are resolved in the order given. Anything that does not name a
    listed repository (out of range, not a number, blank) is skipped.
    Example: '3,1,9' over ['a', 'b', 'c'] -> ['c', 'a']
    """
    selected: List[str] = []
    for token in selection.split(","):
        token = token.strip()
        if not token.isdecimal():
            continue
        index = int(token)
        if 1 <= index <= len(repos):
            selected.append(repos[index - 1])
    return selected


def credential_url(base_url: str, token: str, username: str = "oauth2") -> str:
    """Return a credential-store line for the host of base_url."""
    parsed = urlparse(base_url)
    scheme = parsed.scheme or "https"
    # credential-store matches on protocol and host, so any path is dropped
    host = parsed.netloc or base_url.split("/", 1)[0]
    return f"{scheme}://{username}:{token}@{host}"


def run_tool(
    cmd: Sequence[str],
    cwd: Optional[Union[str, Path]] = None,
    env: Optional[Dict[str, str]] = None,
    timeout: int = 600,
    input: Optional[str] = None,
) -> subprocess.CompletedProcess:
    """Run an external tool, sending its error stream to the session log.

    Raises subprocess.CalledProcessError (with sanitized output) on failure.
    """
    try:
        result = subprocess.run(
            list(cmd),
            cwd=str(cwd) if cwd is not None else None,
            env=env,
            input=input,
            check=True,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.CalledProcessError as e:
        Logger.tool_output(cmd, e.stderr or e.stdout)
        safe_stderr = SecurityValidator.sanitize_for_logging(e.stderr or "")
        safe_stdout = SecurityValidator.sanitize_for_logging(e.stdout or "")
        raise subprocess.CalledProcessError(
            e.returncode, e.cmd, safe_stdout, safe_stderr
        )
    except subprocess.TimeoutExpired:
        Logger.tool_output(cmd, f"timed out after {timeout}s")
        raise
    except OSError as e:
        Logger.tool_output(cmd, f"could not start: {e}")
        raise
    Logger.tool_output(cmd, result.stderr)
    return result


def remove_tree(path: Union[str, Path]) -> None:
    """Remove a directory tree if it exists."""
    if not os.path.isdir(path):
        return
    # git marks object files read-only, which blocks removal on some platforms
    for root, dirs, files in os.walk(path):
        for name in dirs + files:
            full = os.path.join(root, name)
            if not os.path.islink(full):
                os.chmod(full, 0o700)
    shutil.rmtree(path)
