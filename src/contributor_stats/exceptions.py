"""
Exceptions raised by contributor statistics operations.
"""


class ContributorStatsError(Exception):
    """Base exception for contributor statistics operations."""

    pass


class TagNotFoundError(ContributorStatsError):
    """A start or end tag does not exist in the main repository."""

    def __init__(self, kind: str, tag_name: str):
        self.kind = kind
        self.tag_name = tag_name
        super().__init__(f"Could not find {kind} tag {tag_name}")


class ConfigError(ContributorStatsError):
    """The statistics configuration file is missing or invalid."""

    pass
