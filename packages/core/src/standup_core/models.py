"""Activity data models.

Every search surface (commits, pull requests, issues, reviews) is normalised
into the same ``Activity`` shape so the prompt assembler never needs to know
which endpoint a record came from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class ActivityType(str, Enum):
    COMMIT = "commit"
    PULL_REQUEST = "pull_request"
    ISSUE = "issue"
    REVIEW = "review"


@dataclass(frozen=True)
class Activity:
    """One commit, pull request, issue or review performed by the user."""

    type: ActivityType
    repository: str  # "owner/name"
    title: str
    description: str
    url: str
    created_at: datetime | None


@dataclass
class ActivityCounts:
    commits: int = 0
    pull_requests: int = 0
    issues: int = 0
    reviews: int = 0

    @property
    def total(self) -> int:
        return self.commits + self.pull_requests + self.issues + self.reviews


@dataclass
class CollectionResult:
    """Ordered activities plus per-category counts returned by collect_activity."""

    activities: list[Activity] = field(default_factory=list)
    counts: ActivityCounts = field(default_factory=ActivityCounts)

    @property
    def is_empty(self) -> bool:
        return not self.activities


def count_activities(activities: list[Activity]) -> ActivityCounts:
    counts = ActivityCounts()
    for activity in activities:
        if activity.type is ActivityType.COMMIT:
            counts.commits += 1
        elif activity.type is ActivityType.PULL_REQUEST:
            counts.pull_requests += 1
        elif activity.type is ActivityType.ISSUE:
            counts.issues += 1
        elif activity.type is ActivityType.REVIEW:
            counts.reviews += 1
    return counts
