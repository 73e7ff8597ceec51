"""Tests for RepositoryImporter."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from git_client import GitClient
from repository_importer import RepositoryImporter


def _importer(tmp_path: Path, git: MagicMock) -> RepositoryImporter:
    return RepositoryImporter(
        'alice',
        tmp_path / 'temp_repos' / 'gitlab_repo',
        tmp_path / 'temp_repos' / 'temp_clone',
        git,
    )


def test_source_url_points_at_github(tmp_path: Path) -> None:
    importer = _importer(tmp_path, MagicMock())
    assert importer.source_url('site') == 'https://github.com/alice/site.git'


@patch('repository_importer.run_tool')
def test_clone_failure_skips_copy_and_commit(mock_run_tool: MagicMock, tmp_path: Path) -> None:
    git = MagicMock()
    git.clone.side_effect = subprocess.CalledProcessError(128, ['git', 'clone'])

    result = _importer(tmp_path, git).import_repo('site')

    assert result.name == 'site'
    assert result.success is False
    mock_run_tool.assert_not_called()
    git.add.assert_not_called()
    git.commit.assert_not_called()


@patch('repository_importer.run_tool')
def test_copy_failure_leaves_no_commit(mock_run_tool: MagicMock, tmp_path: Path) -> None:
    git = MagicMock()
    git.clone.side_effect = lambda url, dest, env=None: Path(dest).mkdir(parents=True)
    mock_run_tool.side_effect = subprocess.CalledProcessError(23, ['rsync'])
    importer = _importer(tmp_path, git)

    result = importer.import_repo('site')

    assert result.success is False
    git.add.assert_not_called()
    git.commit.assert_not_called()
    assert not importer.temp_clone.exists()


@patch('repository_importer.run_tool')
def test_success_commits_subdirectory(mock_run_tool: MagicMock, tmp_path: Path) -> None:
    git = MagicMock()
    importer = _importer(tmp_path, git)

    result = importer.import_repo('site')

    assert result.success is True
    rsync_cmd = mock_run_tool.call_args.args[0]
    assert rsync_cmd[:3] == ['rsync', '-a', '--exclude=.git']
    assert rsync_cmd[-1] == f"{importer.working_copy / 'github_repos' / 'site'}/"
    git.add.assert_called_once_with(importer.working_copy, 'github_repos/site')
    git.commit.assert_called_once_with(
        importer.working_copy, 'Import GitHub repository: site from alice'
    )


@patch('repository_importer.run_tool')
def test_commit_failure_unstages_import(mock_run_tool: MagicMock, tmp_path: Path) -> None:
    git = MagicMock()
    git.commit.side_effect = subprocess.CalledProcessError(1, ['git', 'commit'])

    result = _importer(tmp_path, git).import_repo('site')

    assert result.success is False
    git.unstage.assert_called_once()


def _git(*args: str, cwd: Path) -> str:
    return subprocess.run(
        ['git', '-c', 'user.name=Test', '-c', 'user.email=test@example.com', *args],
        cwd=cwd, check=True, capture_output=True, text=True,
    ).stdout


@pytest.mark.skipif(
    shutil.which('git') is None or shutil.which('rsync') is None,
    reason='git and rsync are required',
)
def test_imports_with_real_tools(tmp_path: Path) -> None:
    """Each successful import adds one commit and no .git metadata."""
    for name in ('site', 'tools'):
        source = tmp_path / 'sources' / 'alice' / f'{name}.git'
        source.mkdir(parents=True)
        _git('init', '-q', cwd=source)
        (source / 'index.txt').write_text(name, encoding='utf-8')
        _git('add', 'index.txt', cwd=source)
        _git('commit', '-q', '-m', 'initial', cwd=source)

    working_copy = tmp_path / 'temp_repos' / 'gitlab_repo'
    working_copy.mkdir(parents=True)
    git = GitClient()
    git.init(working_copy)
    git.set_config(working_copy, 'user.name', 'Test')
    git.set_config(working_copy, 'user.email', 'test@example.com')
    git.set_config(working_copy, 'commit.gpgsign', 'false')

    importer = RepositoryImporter(
        'alice',
        working_copy,
        tmp_path / 'temp_repos' / 'temp_clone',
        git,
        source_base_url=str(tmp_path / 'sources'),
    )

    results = [importer.import_repo(name) for name in ('site', 'tools', 'missing')]

    assert [r.success for r in results] == [True, True, False]
    assert (working_copy / 'github_repos' / 'site' / 'index.txt').read_text() == 'site'
    assert not (working_copy / 'github_repos' / 'site' / '.git').exists()
    assert not (working_copy / 'github_repos' / 'missing').exists()
    log = _git('log', '--format=%s', cwd=working_copy).splitlines()
    assert log == [
        'Import GitHub repository: tools from alice',
        'Import GitHub repository: site from alice',
    ]
