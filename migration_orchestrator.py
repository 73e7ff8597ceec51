#!/usr/bin/env python3
"""Main orchestrator for mirroring GitHub repositories into one GitLab repository."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

import colorama

from config import (CREDENTIALS_FILE, ImportResult, RunConfig,
                    WorkspacePaths)
from config_collector import collect_run_config
from dependency_checker import DependencyChecker
from git_client import GitClient
from github_source import GitHubSource
from gitlab_target import GitLabTarget
from logging_utils import Logger
from prompts import Prompter
from publisher import Publisher
from repository_importer import RepositoryImporter
from utils import parse_selection, remove_tree

# Exit codes
EXIT_SUCCESS = 0
EXIT_EXECUTION_ERROR = 1
EXIT_INTERRUPTED = 130

BANNER_WIDTH = 57


def display_banner() -> None:
    title = (
        f"{colorama.Fore.GREEN}GitHub{colorama.Fore.BLUE} to "
        f"{colorama.Fore.MAGENTA}GitLab{colorama.Fore.BLUE} Migration"
    )
    padding = (BANNER_WIDTH - len("GitHub to GitLab Migration")) // 2
    rule = "═" * BANNER_WIDTH
    sys.stdout.write(
        f"{colorama.Style.BRIGHT}{colorama.Fore.BLUE}"
        f"  ╔{rule}╗\n"
        f"  ║{' ' * BANNER_WIDTH}║\n"
        f"  ║{' ' * padding}{title}"
        f"{' ' * (BANNER_WIDTH - padding - len('GitHub to GitLab Migration'))}║\n"
        f"  ║{' ' * BANNER_WIDTH}║\n"
        f"  ╚{rule}╝{colorama.Style.RESET_ALL}\n\n"
    )


class MigrationOrchestrator:
    def __init__(
        self,
        base_dir: Optional[Path] = None,
        prompter: type = Prompter,
        credentials_path: Path = CREDENTIALS_FILE,
    ) -> None:
        self.base_dir = Path(base_dir) if base_dir else Path.cwd()
        self.paths = WorkspacePaths.under(self.base_dir)
        self.prompter = prompter
        self.credentials_path = credentials_path
        self.git = GitClient()

    def run(self) -> int:
        try:
            display_banner()
            DependencyChecker(self.prompter).ensure()
            log_path = Logger.open_session_log(self.base_dir)
            Logger.info(f"log file created at: {log_path}")

            cfg = collect_run_config(self.prompter)
            repos = self._select_repositories(cfg)

            self.paths.scratch_dir.mkdir(parents=True, exist_ok=True)
            target = GitLabTarget(cfg, self.git)
            target.connect()
            target.prepare_working_copy(self.paths.working_copy)

            results = self._import_all(cfg, repos)

            Publisher(
                cfg, self.paths.working_copy, self.git, self.credentials_path
            ).publish()

            self._report_summary(cfg, results)
            self._cleanup()
            Logger.success("thank you for using the GitHub to GitLab migration tool!")
            return EXIT_SUCCESS
        except SystemExit as e:
            return int(e.code) if isinstance(e.code, int) else EXIT_EXECUTION_ERROR
        except KeyboardInterrupt:
            Logger.error(f"interrupted; scratch files left in {self.paths.scratch_dir}")
            return EXIT_INTERRUPTED
        except Exception as e:
            Logger.error(f"unexpected error: {e}")
            return EXIT_EXECUTION_ERROR
        finally:
            Logger.close_session_log()

    def _select_repositories(self, cfg: RunConfig) -> List[str]:
        """List public repositories and let the user pick all or some."""
        repos = GitHubSource(cfg.github_username).list_public_repos()
        for idx, name in enumerate(repos, start=1):
            sys.stdout.write(
                f"  {colorama.Fore.CYAN}{idx}.{colorama.Style.RESET_ALL} {name}\n"
            )

        if self.prompter.confirm("Do you want to migrate all repositories?"):
            return list(repos)

        selection = self.prompter.ask(
            "Enter repository numbers to migrate (comma-separated, e.g. 1,3,5):"
        )
        selected = parse_selection(selection, repos)
        Logger.info(f"selected {len(selected)} repositories for migration")
        if not selected:
            Logger.warn("no valid repository numbers given; nothing will be imported")
        return selected

    def _import_all(self, cfg: RunConfig, repos: List[str]) -> List[ImportResult]:
        importer = RepositoryImporter(
            cfg.github_username,
            self.paths.working_copy,
            self.paths.temp_clone,
            self.git,
        )
        total = len(repos)
        Logger.info(f"starting migration of {total} repositories")
        results: List[ImportResult] = []
        for idx, name in enumerate(repos, start=1):
            Logger.info(f"[{idx}/{total}] processing repository: {name}")
            results.append(importer.import_repo(name))
        return results

    def _report_summary(self, cfg: RunConfig, results: List[ImportResult]) -> None:
        succeeded = sum(1 for result in results if result.success)
        Logger.success("migration complete!")
        Logger.success(
            f"successfully migrated {succeeded} out of {len(results)} repositories"
        )
        failed = [result.name for result in results if not result.success]
        if failed:
            Logger.warn(f"failed repositories: {', '.join(failed)}")
        Logger.info(f"gitlab repository: {cfg.gitlab_url}/{cfg.gitlab_repo}")
        Logger.info(f"see the log file for details: {Logger.log_path()}")

    def _cleanup(self) -> None:
        scratch = self.paths.scratch_dir
        if self.prompter.confirm("Do you want to remove the temporary repositories?"):
            remove_tree(scratch)
            Logger.success("temporary repositories removed")
        else:
            Logger.info(f"temporary files kept at: {scratch}")
