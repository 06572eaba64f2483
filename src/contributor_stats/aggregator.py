"""
Commit attribution and exclusion of members, staff and bots.
"""

from collections.abc import Callable, Collection, Iterable, Mapping
from datetime import datetime
from typing import Any

from ..shared_utilities import get_logger, trace_operation
from .config import StatsConfig
from .data_models import (
    CommitRecord,
    ContributorAggregate,
    DateRange,
    RepositorySummary,
)
from .pagination import iter_pages


class ContributionAggregator:
    """
    Accumulates per-author commit counts across repositories.

    Exclusion happens per commit: bot accounts never get an entry, and a
    former staff member only gets credit for commits authored at or after
    their cutoff.
    """

    def __init__(
        self,
        ignored_usernames: Collection[str] = frozenset(),
        staff_until: Mapping[str, datetime] | None = None,
    ):
        """Initialize the aggregator.

        Args:
            ignored_usernames: Identities whose commits are never counted
            staff_until: Login -> first instant at which commits count again
        """
        self.ignored_usernames = frozenset(ignored_usernames)
        self.staff_until = dict(staff_until or {})
        self.contributors: dict[str, ContributorAggregate] = {}
        self.skipped_bot_commits = 0
        self.skipped_staff_commits = 0
        self.logger = get_logger(__name__)

    @classmethod
    def from_config(cls, config: StatsConfig) -> "ContributionAggregator":
        return cls(
            ignored_usernames=config.ignored_usernames,
            staff_until=config.staff_until,
        )

    def was_staff_at_time_of_commit(self, identity: str, commit: CommitRecord) -> bool:
        cutoff = self.staff_until.get(identity)
        return cutoff is not None and commit.authored_at < cutoff

    def add_commit(self, repo_full_name: str, commit: CommitRecord) -> bool:
        """
        Attribute one commit, unless it is excluded.

        Returns:
            True if the commit was counted
        """
        identity = commit.author.key

        if identity in self.ignored_usernames:
            self.skipped_bot_commits += 1
            return False

        if self.was_staff_at_time_of_commit(identity, commit):
            self.skipped_staff_commits += 1
            return False

        contributor = self.contributors.get(identity)
        if contributor is None:
            contributor = ContributorAggregate(key=identity)
            self.contributors[identity] = contributor

        contributor.record(repo_full_name, commit.author.url)
        return True

    def add_commits(self, repo_full_name: str, commits: Iterable[CommitRecord]) -> int:
        """Attribute a batch of commits from one repository; returns the count kept."""
        return sum(1 for commit in commits if self.add_commit(repo_full_name, commit))

    def accumulate(
        self,
        client: Any,
        repositories: Iterable[RepositorySummary],
        date_range: DateRange,
        on_repository: Callable[[RepositorySummary], None] | None = None,
    ) -> dict[str, ContributorAggregate]:
        """
        Walk the commits of every repository within the date range.

        Args:
            client: API client providing list_commits and next_page
            repositories: Repositories to scan, in processing order
            date_range: Commit window passed to the API
            on_repository: Called before each repository is read

        Returns:
            Mapping of identity to aggregate, including current members
        """
        for repo in repositories:
            if on_repository:
                on_repository(repo)

            with trace_operation("read_repository_commits", {"repo": repo.full_name}):
                first_page = client.list_commits(
                    repo.full_name, since=date_range.start, until=date_range.end
                )
                kept = 0
                for page in iter_pages(first_page, client.next_page):
                    kept += self.add_commits(repo.full_name, page.items)

            self.logger.debug(f"Counted {kept} commits in {repo.full_name}")

        self.logger.debug(
            f"Skipped {self.skipped_bot_commits} bot and "
            f"{self.skipped_staff_commits} staff commits"
        )
        return self.contributors


def exclude_members(
    contributors: Mapping[str, ContributorAggregate], members: Collection[str]
) -> dict[str, ContributorAggregate]:
    """Drop every contributor who is a current organization member."""
    return {
        key: contributor
        for key, contributor in contributors.items()
        if key not in members
    }
