"""Tests for GitHubSource listing."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import github
import pytest

from github_source import EXIT_GITHUB_ERROR, GitHubSource


def _source_with_page(mock_github: MagicMock, names) -> GitHubSource:
    page = [SimpleNamespace(name=name) for name in names]
    user = mock_github.return_value.get_user.return_value
    user.get_repos.return_value.get_page.return_value = page
    return GitHubSource('alice')


@patch('github_source.github.Github')
def test_lists_names_in_response_order(mock_github: MagicMock) -> None:
    source = _source_with_page(mock_github, ['site', 'tools', 'blog'])

    assert source.list_public_repos() == ['site', 'tools', 'blog']

    mock_github.assert_called_once_with(per_page=100)
    mock_github.return_value.get_user.assert_called_once_with('alice')
    user = mock_github.return_value.get_user.return_value
    user.get_repos.assert_called_once_with(type='public')
    user.get_repos.return_value.get_page.assert_called_once_with(0)


@patch('github_source.github.Github')
def test_empty_listing_exits(mock_github: MagicMock) -> None:
    source = _source_with_page(mock_github, [])
    with pytest.raises(SystemExit) as excinfo:
        source.list_public_repos()
    assert excinfo.value.code == EXIT_GITHUB_ERROR


@patch('github_source.github.Github')
def test_unknown_user_exits(mock_github: MagicMock) -> None:
    mock_github.return_value.get_user.side_effect = github.UnknownObjectException(
        404, {'message': 'Not Found'}, {}
    )
    with pytest.raises(SystemExit) as excinfo:
        GitHubSource('nobody').list_public_repos()
    assert excinfo.value.code == EXIT_GITHUB_ERROR
