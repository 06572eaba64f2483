"""
Select which organization repositories get scanned for commits.
"""

from collections.abc import Iterable
from datetime import datetime

from .data_models import RepositorySelection, RepositorySummary


def select_repositories(
    repositories: Iterable[RepositorySummary],
    start_date: datetime,
    included_forks: Iterable[str] = (),
) -> RepositorySelection:
    """
    Partition repositories pushed since ``start_date`` into included and ignored.

    Repositories untouched since before the window cannot hold commits in
    range and are dropped. Forks are only scanned when their name is in
    ``included_forks``; the rest are returned as ignored for the report.
    """
    allowed_forks = set(included_forks)
    included: list[RepositorySummary] = []
    ignored: list[RepositorySummary] = []

    for repo in repositories:
        if repo.pushed_at is None or repo.pushed_at < start_date:
            continue

        if repo.is_fork and repo.name not in allowed_forks:
            ignored.append(repo)
        else:
            included.append(repo)

    return RepositorySelection(included=included, ignored=ignored)
