"""
External contributor statistics for a GitHub organization.

Counts commits by non-member, non-staff authors across an organization's
public repositories between two release tags.
"""

from .aggregator import ContributionAggregator, exclude_members
from .config import StatsConfig, load_config
from .core import ContributorStatsCalculator
from .data_models import (
    CommitRecord,
    ContributorAggregate,
    ContributorReport,
    DateRange,
    LinkedAuthor,
    Page,
    RepositorySummary,
    Tag,
    UnlinkedAuthor,
)
from .exceptions import ConfigError, ContributorStatsError, TagNotFoundError

__all__ = [
    "ContributorStatsCalculator",
    "ContributionAggregator",
    "exclude_members",
    "StatsConfig",
    "load_config",
    "CommitRecord",
    "ContributorAggregate",
    "ContributorReport",
    "DateRange",
    "LinkedAuthor",
    "Page",
    "RepositorySummary",
    "Tag",
    "UnlinkedAuthor",
    "ConfigError",
    "ContributorStatsError",
    "TagNotFoundError",
]
