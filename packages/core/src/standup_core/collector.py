"""Activity collection across GitHub's search surfaces.

Four sources are queried one after another, in a fixed order:

    commits → pull requests → issues → reviews

Each source is a ``SourceSpec`` run through the same ``paginate`` loop, so
query construction and item mapping are the only things that differ.
Commit search is known to be restricted for some accounts, so a failure
there is logged and treated as zero commits. A failure on any other source
aborts the whole collection.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from github import Github

from standup_core.errors import CollectionError
from standup_core.gh.search import PER_PAGE, search_page
from standup_core.models import Activity, ActivityType, CollectionResult, count_activities

logger = logging.getLogger(__name__)

# 10 pages x 100 results bounds a single source at 1000 items.
MAX_PAGES = 10

_DATE_FORMAT = "%Y-%m-%d"
_REPOS_URL_MARKER = "/repos/"


@dataclass(frozen=True)
class SourceSpec:
    """How to query one search surface and normalise its items."""

    name: str  # used in log lines and error messages, e.g. "pull requests"
    endpoint: str  # "commits" | "issues"
    actor_qualifier: str  # "author" | "reviewed-by"
    date_field: str  # "committer-date" | "created"
    sort: str
    scope: str | None  # extra qualifier such as "type:pr"
    map_item: Callable[[dict], Activity]


def build_query(
    actor_qualifier: str,
    user: str,
    date_field: str,
    start: datetime,
    end: datetime,
    repo: str | None = None,
    scope: str | None = None,
) -> str:
    query = f"{actor_qualifier}:{user} {date_field}:{start.strftime(_DATE_FORMAT)}..{end.strftime(_DATE_FORMAT)}"
    if repo:
        query += f" repo:{repo}"
    if scope:
        query += f" {scope}"
    return query


def paginate(fetch_page: Callable[[int], list[dict]], map_item: Callable[[dict], Activity]) -> list[Activity]:
    """Fetch pages 1..MAX_PAGES until an empty or short page is returned.

    Any exception raised by ``fetch_page`` propagates immediately; pages
    already fetched are discarded with it.
    """
    activities: list[Activity] = []
    for page in range(1, MAX_PAGES + 1):
        items = fetch_page(page)
        if not items:
            break
        activities.extend(map_item(item) for item in items)
        if len(items) < PER_PAGE:
            break
    return activities


# ---------------------------------------------------------------------------
# Item mapping
# ---------------------------------------------------------------------------


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _repository_name(item: dict) -> str:
    """Return "owner/name" for a search item.

    Commit results embed a repository object; issue-search results usually
    carry only ``repository_url``.
    """
    repository = item.get("repository") or {}
    if repository.get("full_name"):
        return repository["full_name"]
    repository_url = item.get("repository_url") or ""
    if _REPOS_URL_MARKER in repository_url:
        return repository_url.split(_REPOS_URL_MARKER, 1)[1]
    return ""


def map_commit(item: dict) -> Activity:
    commit = item.get("commit") or {}
    message = commit.get("message") or ""
    return Activity(
        type=ActivityType.COMMIT,
        repository=_repository_name(item),
        title=message.split("\n")[0],
        description=message,
        url=item.get("html_url") or "",
        created_at=_parse_timestamp((commit.get("author") or {}).get("date")),
    )


def map_pull_request(item: dict) -> Activity:
    return Activity(
        type=ActivityType.PULL_REQUEST,
        repository=_repository_name(item),
        title=f"PR #{item.get('number')}: {item.get('title') or ''}",
        description=item.get("body") or "",
        url=item.get("html_url") or "",
        created_at=_parse_timestamp(item.get("created_at")),
    )


def map_issue(item: dict) -> Activity:
    return Activity(
        type=ActivityType.ISSUE,
        repository=_repository_name(item),
        title=f"Issue #{item.get('number')}: {item.get('title') or ''}",
        description=item.get("body") or "",
        url=item.get("html_url") or "",
        created_at=_parse_timestamp(item.get("created_at")),
    )


def map_review(item: dict) -> Activity:
    # The search returns PRs the user reviewed, not review events: one record per PR.
    title = item.get("title") or ""
    return Activity(
        type=ActivityType.REVIEW,
        repository=_repository_name(item),
        title=f"Reviewed PR #{item.get('number')}: {title}",
        description=f"Reviewed pull request: {title}",
        url=item.get("html_url") or "",
        created_at=_parse_timestamp(item.get("created_at")),
    )


COMMITS = SourceSpec(
    name="commits",
    endpoint="commits",
    actor_qualifier="author",
    date_field="committer-date",
    sort="committer-date",
    scope=None,
    map_item=map_commit,
)
PULL_REQUESTS = SourceSpec(
    name="pull requests",
    endpoint="issues",
    actor_qualifier="author",
    date_field="created",
    sort="created",
    scope="type:pr",
    map_item=map_pull_request,
)
ISSUES = SourceSpec(
    name="issues",
    endpoint="issues",
    actor_qualifier="author",
    date_field="created",
    sort="created",
    scope="type:issue",
    map_item=map_issue,
)
REVIEWS = SourceSpec(
    name="reviews",
    endpoint="issues",
    actor_qualifier="reviewed-by",
    date_field="created",
    sort="created",
    scope="type:pr",
    map_item=map_review,
)


# ---------------------------------------------------------------------------
# Collectors
# ---------------------------------------------------------------------------


def collect_source(
    gh: Github,
    spec: SourceSpec,
    user: str,
    start: datetime,
    end: datetime,
    repo: Optional[str] = None,
) -> list[Activity]:
    query = build_query(spec.actor_qualifier, user, spec.date_field, start, end, repo=repo, scope=spec.scope)
    logger.debug("Searching %s: %s", spec.name, query)
    return paginate(lambda page: search_page(gh, spec.endpoint, query, spec.sort, page), spec.map_item)


def collect_commits(gh: Github, user: str, start: datetime, end: datetime, repo: Optional[str] = None) -> list[Activity]:
    return collect_source(gh, COMMITS, user, start, end, repo=repo)


def collect_pull_requests(
    gh: Github, user: str, start: datetime, end: datetime, repo: Optional[str] = None
) -> list[Activity]:
    return collect_source(gh, PULL_REQUESTS, user, start, end, repo=repo)


def collect_issues(gh: Github, user: str, start: datetime, end: datetime, repo: Optional[str] = None) -> list[Activity]:
    return collect_source(gh, ISSUES, user, start, end, repo=repo)


def collect_reviews(gh: Github, user: str, start: datetime, end: datetime, repo: Optional[str] = None) -> list[Activity]:
    return collect_source(gh, REVIEWS, user, start, end, repo=repo)


def collect_activity(
    gh: Github,
    user: str,
    start: datetime,
    end: datetime,
    repo: Optional[str] = None,
) -> CollectionResult:
    """Run every collector in order and merge their results.

    An empty result is a valid outcome; callers decide how to report it.
    """
    activities: list[Activity] = []

    try:
        commits = collect_commits(gh, user, start, end, repo=repo)
    except Exception as e:
        logger.warning("Skipped commits (commit search may be restricted for this account): %s", e)
    else:
        logger.info("Found %d commits", len(commits))
        activities.extend(commits)

    for spec, collect in (
        (PULL_REQUESTS, collect_pull_requests),
        (ISSUES, collect_issues),
        (REVIEWS, collect_reviews),
    ):
        try:
            found = collect(gh, user, start, end, repo=repo)
        except Exception as e:
            raise CollectionError(spec.name, str(e)) from e
        logger.info("Found %d %s", len(found), spec.name)
        activities.extend(found)

    return CollectionResult(activities=activities, counts=count_activities(activities))
