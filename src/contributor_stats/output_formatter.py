"""
Output formatting for contributor reports.
"""

import json
from collections.abc import Iterable, Mapping
from typing import Any

from .data_models import ContributorAggregate, ContributorReport


def sort_contributors(
    contributors: Mapping[str, ContributorAggregate] | Iterable[ContributorAggregate],
) -> list[ContributorAggregate]:
    """
    Order contributors by (count, key), both descending.

    Equal counts therefore list the lexicographically larger key first. That
    tie-break is kept so reports stay comparable with earlier runs.
    """
    if isinstance(contributors, Mapping):
        contributors = contributors.values()
    return sorted(contributors, key=lambda c: (c.count, c.key), reverse=True)


class ContributorReportFormatter:
    """Renders contributor aggregates as text lines or JSON."""

    def __init__(self, verbose: bool = False):
        """Initialize formatter.

        Args:
            verbose: Append the per-repository breakdown to every line
        """
        self.verbose = verbose

    @staticmethod
    def sorted_repos(contributor: ContributorAggregate) -> list[tuple[str, int]]:
        """Repositories by count, descending; ties in reverse order of first commit."""
        ascending = sorted(contributor.repos.items(), key=lambda item: item[1])
        return ascending[::-1]

    def format_contributor(self, contributor: ContributorAggregate) -> str:
        """Format one contributor as ``count [name](url)`` or ``count name``."""
        count = f"{contributor.count:>3}"

        if contributor.url:
            text = f"{count} [{contributor.key}]({contributor.url})"
        else:
            text = f"{count} {contributor.key}"

        if self.verbose:
            text += f" ({self.sorted_repos(contributor)!r})"

        return text

    def format_lines(
        self,
        contributors: Mapping[str, ContributorAggregate] | Iterable[ContributorAggregate],
    ) -> list[str]:
        return [self.format_contributor(c) for c in sort_contributors(contributors)]

    def format_text(self, report: ContributorReport) -> str:
        """Format the contributor section of a report for the console."""
        lines = ["", "", f"Contributors ({len(report.contributors)}):"]
        lines.extend(self.format_lines(report.contributors))
        return "\n".join(lines)

    def to_dict(self, report: ContributorReport) -> dict[str, Any]:
        contributors = []
        for contributor in sort_contributors(report.contributors):
            entry: dict[str, Any] = {
                "name": contributor.key,
                "count": contributor.count,
                "url": contributor.url,
            }
            if self.verbose:
                entry["repos"] = dict(self.sorted_repos(contributor))
            contributors.append(entry)

        return {
            "organization": report.organization,
            "start_date": report.date_range.start.isoformat(),
            "end_date": report.date_range.end.isoformat(),
            "ignored_repositories": report.ignored_repositories,
            "contributor_count": len(contributors),
            "contributors": contributors,
            "metadata": report.metadata,
        }

    def format_json(self, report: ContributorReport, indent: int = 2) -> str:
        """Format a report as JSON, keeping the contributor sort order."""
        return json.dumps(self.to_dict(report), indent=indent, default=str)

    def format(self, report: ContributorReport, output_format: str = "text") -> str:
        if output_format == "text":
            return self.format_text(report)
        elif output_format == "json":
            return self.format_json(report)
        else:
            raise ValueError(f"Unsupported format: {output_format}")
