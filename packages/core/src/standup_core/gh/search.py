from __future__ import annotations

from github import Auth, Github

# GitHub's search API caps page size at 100.
PER_PAGE = 100


def get_client(token: str) -> Github:
    # retry=None: PyGithub otherwise retries 5xx and rate-limited 403s with backoff.
    return Github(auth=Auth.Token(token), per_page=PER_PAGE, retry=None)


def get_current_user(gh: Github) -> str:
    return gh.get_user().login


def search_page(gh: Github, endpoint: str, query: str, sort: str, page: int, per_page: int = PER_PAGE) -> list[dict]:
    """Fetch one page of ``GET /search/<endpoint>`` and return its raw ``items``.

    The raw JSON is used instead of PyGithub's PaginatedList because the
    search payload already carries the repository full name; going through
    the wrapped objects would trigger one lazy repository fetch per item.
    GithubException propagates to the caller unchanged.
    """
    _, data = gh.requester.requestJsonAndCheck(
        "GET",
        f"/search/{endpoint}",
        parameters={
            "q": query,
            "sort": sort,
            "order": "desc",
            "per_page": per_page,
            "page": page,
        },
    )
    return (data or {}).get("items") or []
