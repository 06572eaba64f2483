"""
Core contributor statistics functionality.
"""

import time
from collections.abc import Callable
from typing import Any

from ..shared_utilities import get_logger, trace_function
from .aggregator import ContributionAggregator, exclude_members
from .config import StatsConfig
from .data_models import ContributorReport, DateRange, RepositorySelection
from .date_range import DateRangeResolver
from .output_formatter import sort_contributors
from .pagination import collect_all
from .repository_filter import select_repositories


class ContributorStatsCalculator:
    """
    Computes the external contributors of an organization between two tags.

    Every step runs sequentially against the API client; the report is only
    returned once all repositories have been read.
    """

    def __init__(
        self,
        client: Any,
        config: StatsConfig,
        progress_callback: Callable[[str], None] | None = None,
    ):
        """Initialize calculator.

        Args:
            client: GitHubClient or any object with the same listing methods
            config: Organization and exclusion policy
            progress_callback: Receives one narration line per step
        """
        self.client = client
        self.config = config
        self.progress_callback = progress_callback
        self.logger = get_logger(__name__)

    def _progress(self, message: str) -> None:
        self.logger.debug(message)
        if self.progress_callback:
            self.progress_callback(message)

    def resolve_date_range(
        self, start_tag: str, end_tag: str | None = None
    ) -> DateRange:
        resolver = DateRangeResolver(self.client, self.config.main_repository)
        return resolver.resolve(start_tag, end_tag)

    def read_member_names(self) -> set[str]:
        first_page = self.client.list_org_members(self.config.organization)
        return set(collect_all(first_page, self.client.next_page))

    def select_repositories(self, date_range: DateRange) -> RepositorySelection:
        first_page = self.client.list_org_repositories(self.config.organization)
        repositories = collect_all(first_page, self.client.next_page)
        selection = select_repositories(
            repositories, date_range.start, self.config.included_forks
        )
        self.logger.debug(
            f"{len(repositories)} repositories, {len(selection.included)} to scan, "
            f"{len(selection.ignored)} forks ignored"
        )
        return selection

    @trace_function("calculate_contributor_stats", include_args=True)
    def calculate(self, start_tag: str, end_tag: str | None = None) -> ContributorReport:
        """
        Run the full report.

        Args:
            start_tag: Tag whose commit date starts the range
            end_tag: Tag whose commit date ends the range, or None for now

        Returns:
            ContributorReport with contributors sorted for display

        Raises:
            TagNotFoundError: If a tag cannot be found
            github.GithubException: If an API request fails
        """
        started = time.time()

        self._progress("Calculating start and end date...")
        date_range = self.resolve_date_range(start_tag, end_tag)
        self._progress(
            f"Counting contributions between {date_range.start.isoformat()} "
            f"and {date_range.end.isoformat()}"
        )

        self._progress("Reading org members...")
        members = self.read_member_names()

        selection = self.select_repositories(date_range)
        aggregator = ContributionAggregator.from_config(self.config)
        contributors = aggregator.accumulate(
            self.client,
            selection.included,
            date_range,
            on_repository=lambda repo: self._progress(
                f"Reading commits for {repo.full_name}..."
            ),
        )

        ignored_names = [repo.name for repo in selection.ignored]
        if ignored_names:
            self._progress("")
            self._progress("Ignored repositories: ")
            for name in ignored_names:
                self._progress(name)

        external = exclude_members(contributors, members)

        self.logger.info(
            f"Found {len(external)} external contributors "
            f"({len(contributors) - len(external)} members excluded)"
        )

        return ContributorReport(
            organization=self.config.organization,
            date_range=date_range,
            ignored_repositories=ignored_names,
            contributors=sort_contributors(external),
            metadata={
                "start_tag": start_tag,
                "end_tag": end_tag,
                "repositories_scanned": len(selection.included),
                "members": len(members),
                "skipped_bot_commits": aggregator.skipped_bot_commits,
                "skipped_staff_commits": aggregator.skipped_staff_commits,
                "duration_seconds": round(time.time() - started, 2),
            },
        )
