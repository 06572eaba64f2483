"""
Resolve release tag names into the commit window of a report.
"""

from datetime import datetime, timezone
from typing import Any

from ..shared_utilities import get_logger, trace_function
from .data_models import DateRange, Tag
from .exceptions import TagNotFoundError
from .pagination import iter_pages


class DateRangeResolver:
    """Maps a start tag and an optional end tag to a DateRange.

    Both dates are the committer timestamps of the tagged commits. Without an
    end tag the range ends at the current UTC time, so two runs with only a
    start tag will not cover the same window.
    """

    def __init__(self, client: Any, repo_full_name: str):
        self.client = client
        self.repo_full_name = repo_full_name
        self.logger = get_logger(__name__)

    def find_tags(
        self, start_tag_name: str, end_tag_name: str | None = None
    ) -> tuple[Tag, Tag | None]:
        """
        Locate the requested tags, fetching no more pages than needed.

        Raises:
            TagNotFoundError: If a requested tag is not in any page
        """
        start_tag: Tag | None = None
        end_tag: Tag | None = None
        pages_read = 0

        first_page = self.client.list_tags(self.repo_full_name)
        for page in iter_pages(first_page, self.client.next_page):
            pages_read += 1
            for tag in page.items:
                if start_tag is None and tag.name == start_tag_name:
                    start_tag = tag
                if end_tag_name and end_tag is None and tag.name == end_tag_name:
                    end_tag = tag

            if start_tag is not None and (not end_tag_name or end_tag is not None):
                break

        self.logger.debug(f"Searched {pages_read} page(s) of tags")

        if start_tag is None:
            raise TagNotFoundError("start", start_tag_name)
        if end_tag_name and end_tag is None:
            raise TagNotFoundError("end", end_tag_name)

        return start_tag, end_tag

    @trace_function("resolve_date_range", include_args=True)
    def resolve(self, start_tag_name: str, end_tag_name: str | None = None) -> DateRange:
        """
        Resolve the date range bounded by two tags.

        Args:
            start_tag_name: Tag marking the start of the range
            end_tag_name: Tag marking the end, or None for "now"

        Returns:
            DateRange with timezone-aware UTC timestamps

        Raises:
            TagNotFoundError: If either tag does not exist
        """
        start_tag, end_tag = self.find_tags(start_tag_name, end_tag_name)

        start = self.client.get_commit_date(self.repo_full_name, start_tag.commit_sha)
        if end_tag is not None:
            end = self.client.get_commit_date(self.repo_full_name, end_tag.commit_sha)
        else:
            end = datetime.now(timezone.utc)

        if start > end:
            self.logger.warning(
                f"Start tag {start_tag_name} is newer than the end of the range"
            )

        return DateRange(start=start, end=end)
