"""
Data models for contributor statistics.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class Page:
    """One page of a paginated listing.

    ``next_cursor`` is opaque to everything except the client that produced it;
    ``None`` means there are no more pages.
    """

    items: list[Any]
    next_cursor: Any | None = None


@dataclass(frozen=True)
class Tag:
    """A named pointer to a commit."""

    name: str
    commit_sha: str


@dataclass(frozen=True)
class LinkedAuthor:
    """Commit author linked to a GitHub account."""

    login: str
    html_url: str | None = None

    @property
    def key(self) -> str:
        return self.login

    @property
    def url(self) -> str | None:
        return self.html_url


@dataclass(frozen=True)
class UnlinkedAuthor:
    """Commit author whose email matches no account; only the raw name is known."""

    name: str

    @property
    def key(self) -> str:
        return self.name

    @property
    def url(self) -> None:
        return None


Author = LinkedAuthor | UnlinkedAuthor


@dataclass(frozen=True)
class CommitRecord:
    """A commit as seen by the aggregator."""

    sha: str
    author: Author
    committed_at: datetime
    authored_at: datetime


@dataclass(frozen=True)
class RepositorySummary:
    """The repository fields needed to decide whether to scan it."""

    full_name: str
    name: str
    owner: str
    is_fork: bool
    pushed_at: datetime | None


@dataclass(frozen=True)
class DateRange:
    """Commit window; start <= end is expected but not enforced."""

    start: datetime
    end: datetime


@dataclass(frozen=True)
class RepositorySelection:
    """Repositories to scan and forks skipped for the report."""

    included: list[RepositorySummary]
    ignored: list[RepositorySummary]


@dataclass
class ContributorAggregate:
    """Commit counts attributed to one author during a run."""

    key: str
    count: int = 0
    url: str | None = None
    repos: dict[str, int] = field(default_factory=dict)

    def record(self, repo_full_name: str, url: str | None = None) -> None:
        """Attribute one more commit in ``repo_full_name`` to this author."""
        self.count += 1
        self.repos[repo_full_name] = self.repos.get(repo_full_name, 0) + 1
        if self.url is None and url:
            self.url = url


@dataclass
class ContributorReport:
    """Complete result of a contributor statistics run."""

    organization: str
    date_range: DateRange
    ignored_repositories: list[str]
    contributors: list[ContributorAggregate]
    metadata: dict[str, Any] = field(default_factory=dict)
