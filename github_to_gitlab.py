#!/usr/bin/env python3
"""
GitHub to GitLab - Mirror a GitHub user's public repositories into a single
GitLab repository.

Every selected repository is cloned, its files (without git metadata) are
copied into github_repos/<name> of the GitLab repository and committed on
their own; the result is pushed once at the end. History of the source
repositories is not preserved.

All settings are asked for interactively; the tool takes no arguments.
"""

from __future__ import annotations

import signal
import sys
from typing import NoReturn

from migration_orchestrator import MigrationOrchestrator

# Exit codes
EXIT_TERMINATED = 143


def _terminate(_signum, _frame) -> NoReturn:
    # Unwind through finally blocks so transient credentials get removed
    sys.exit(EXIT_TERMINATED)


def main() -> NoReturn:
    signal.signal(signal.SIGTERM, _terminate)
    orchestrator = MigrationOrchestrator()
    sys.exit(orchestrator.run())


if __name__ == "__main__":
    main()
