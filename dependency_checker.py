#!/usr/bin/env python3
"""Checks for the external tools the migration shells out to."""

from __future__ import annotations

import shutil
import subprocess
import sys
from typing import List, Optional, Sequence, Tuple

from logging_utils import Logger
from prompts import Prompter

# Exit codes
EXIT_DEPENDENCY_ERROR = 20

REQUIRED_TOOLS: Tuple[str, ...] = ("git", "rsync")

# Probed in order, first match wins
PACKAGE_MANAGERS: Tuple[str, ...] = ("apt-get", "yum", "brew")


class DependencyChecker:
    """Verifies required executables and offers to install missing ones."""

    def __init__(
        self,
        prompter: type = Prompter,
        tools: Sequence[str] = REQUIRED_TOOLS,
    ) -> None:
        self.prompter = prompter
        self.tools = tuple(tools)

    def find_missing_tools(self) -> List[str]:
        return [tool for tool in self.tools if shutil.which(tool) is None]

    @staticmethod
    def detect_package_manager() -> Optional[str]:
        for manager in PACKAGE_MANAGERS:
            if shutil.which(manager) is not None:
                return manager
        return None

    @staticmethod
    def install_commands(manager: str, tools: Sequence[str]) -> List[List[str]]:
        if manager == "apt-get":
            return [
                ["sudo", "apt-get", "update"],
                ["sudo", "apt-get", "install", "-y", *tools],
            ]
        if manager == "yum":
            return [["sudo", "yum", "install", "-y", *tools]]
        if manager == "brew":
            return [["brew", "install", *tools]]
        raise ValueError(f"unsupported package manager: {manager}")

    def ensure(self) -> None:
        """Return when every tool is present; exit the process otherwise."""
        Logger.info("checking required dependencies")
        missing = self.find_missing_tools()
        if not missing:
            Logger.success("all dependencies are installed")
            return

        Logger.error(f"missing required dependencies: {' '.join(missing)}")
        if not self.prompter.confirm("Would you like to install the missing dependencies?"):
            Logger.error(
                "required dependencies missing; install them and run the tool again"
            )
            sys.exit(EXIT_DEPENDENCY_ERROR)

        manager = self.detect_package_manager()
        if manager is None:
            Logger.error("no supported package manager found (apt-get, yum, brew)")
            Logger.warn(f"install these dependencies manually: {' '.join(missing)}")
            sys.exit(EXIT_DEPENDENCY_ERROR)

        self._install(manager, missing)

        still_missing = self.find_missing_tools()
        if still_missing:
            Logger.error(
                f"dependencies still missing after install: {' '.join(still_missing)}"
            )
            sys.exit(EXIT_DEPENDENCY_ERROR)
        Logger.success("all dependencies are installed")

    def _install(self, manager: str, tools: Sequence[str]) -> None:
        Logger.info(f"installing with {manager}: {' '.join(tools)}")
        for cmd in self.install_commands(manager, tools):
            # Inherit the terminal so sudo can ask for a password
            try:
                subprocess.run(cmd, check=True)
            except (subprocess.CalledProcessError, OSError) as e:
                Logger.error(f"installation command failed: {' '.join(cmd)}: {e}")
                sys.exit(EXIT_DEPENDENCY_ERROR)
