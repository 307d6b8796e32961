"""Tests for the GitHub search helpers."""

from unittest.mock import MagicMock

import pytest
from github import GithubException

from standup_core.gh.search import PER_PAGE, get_client, get_current_user, search_page


class TestSearchPage:
    def test_sends_query_parameters(self):
        gh = MagicMock()
        gh.requester.requestJsonAndCheck.return_value = ({}, {"total_count": 1, "items": [{"number": 1}]})

        items = search_page(gh, "issues", "author:octocat type:pr", "created", page=2)

        assert items == [{"number": 1}]
        gh.requester.requestJsonAndCheck.assert_called_once_with(
            "GET",
            "/search/issues",
            parameters={
                "q": "author:octocat type:pr",
                "sort": "created",
                "order": "desc",
                "per_page": PER_PAGE,
                "page": 2,
            },
        )

    def test_missing_items_is_empty_page(self):
        gh = MagicMock()
        gh.requester.requestJsonAndCheck.return_value = ({}, {"total_count": 0})
        assert search_page(gh, "commits", "author:x", "committer-date", page=1) == []

    def test_errors_propagate(self):
        gh = MagicMock()
        gh.requester.requestJsonAndCheck.side_effect = GithubException(422, {"message": "Validation Failed"}, None)
        with pytest.raises(GithubException):
            search_page(gh, "commits", "author:x", "committer-date", page=1)


def test_get_current_user_returns_login():
    gh = MagicMock()
    gh.get_user.return_value.login = "octocat"
    assert get_current_user(gh) == "octocat"


def test_get_client_disables_retries(mocker):
    mock_github = mocker.patch("standup_core.gh.search.Github")
    get_client("tok")

    kwargs = mock_github.call_args.kwargs
    assert kwargs["retry"] is None
    assert kwargs["per_page"] == PER_PAGE
