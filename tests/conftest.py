"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime, timezone
from types import MappingProxyType

import pytest
from loguru import logger

from src.contributor_stats.config import StatsConfig
from src.contributor_stats.data_models import (
    CommitRecord,
    LinkedAuthor,
    Page,
    RepositorySummary,
    Tag,
    UnlinkedAuthor,
)
from src.shared_utilities.rate_limit_manager import RateLimitManager


class FakeGitHubClient:
    """In-memory stand-in for GitHubClient that serves fixed-size pages.

    Cursors are ``(listing, page_index)`` tuples and every page served is
    recorded in ``fetched`` so tests can check how far a walk went.
    """

    def __init__(
        self,
        tags=(),
        commit_dates=None,
        repositories=(),
        members=(),
        commits=None,
        page_size=2,
    ):
        self.page_size = page_size
        self.listings = {
            "tags": list(tags),
            "repositories": list(repositories),
            "members": list(members),
        }
        self.commit_dates = commit_dates or {}
        self.commits = commits or {}
        self.fetched = []
        self.commit_queries = []
        self.rate_limit_manager = RateLimitManager()

    def _page(self, listing, index):
        items = self.listings[listing]
        self.fetched.append((listing, index))
        start = index * self.page_size
        chunk = items[start : start + self.page_size]
        has_more = start + self.page_size < len(items)
        return Page(items=chunk, next_cursor=(listing, index + 1) if has_more else None)

    def next_page(self, cursor):
        listing, index = cursor
        return self._page(listing, index)

    def list_tags(self, repo_full_name):
        return self._page("tags", 0)

    def get_commit_date(self, repo_full_name, sha):
        return self.commit_dates[sha]

    def list_org_repositories(self, org):
        return self._page("repositories", 0)

    def list_org_members(self, org):
        return self._page("members", 0)

    def list_commits(self, repo_full_name, since, until):
        self.commit_queries.append((repo_full_name, since, until))
        listing = f"commits:{repo_full_name}"
        self.listings[listing] = [
            commit
            for commit in self.commits.get(repo_full_name, [])
            if since <= commit.committed_at <= until
        ]
        return self._page(listing, 0)


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def reset_loguru():
    """Keep loguru sinks from leaking between tests."""
    logger.remove()
    yield
    logger.remove()


@pytest.fixture
def fake_client_cls():
    return FakeGitHubClient


@pytest.fixture
def stats_config():
    """Small policy table for testing."""
    return StatsConfig(
        organization="acme",
        main_repository="acme/core",
        included_forks=frozenset({"allowed-fork"}),
        ignored_usernames=frozenset({"dependabot[bot]", "github-actions[bot]"}),
        staff_until=MappingProxyType({"former": utc(2022, 1, 15)}),
    )


@pytest.fixture
def make_commit():
    """Factory for CommitRecord objects."""
    counter = iter(range(1, 10_000))

    def factory(author, when, linked=True, url=None):
        if linked:
            identity = LinkedAuthor(
                login=author, html_url=url or f"https://github.com/{author}"
            )
        else:
            identity = UnlinkedAuthor(name=author)
        return CommitRecord(
            sha=f"sha{next(counter)}",
            author=identity,
            committed_at=when,
            authored_at=when,
        )

    return factory


@pytest.fixture
def make_repo():
    """Factory for RepositorySummary objects."""

    def factory(name, pushed_at, is_fork=False, owner="acme"):
        return RepositorySummary(
            full_name=f"{owner}/{name}",
            name=name,
            owner=owner,
            is_fork=is_fork,
            pushed_at=pushed_at,
        )

    return factory


@pytest.fixture
def release_tags():
    """Tags of the main repository, newest first as the API returns them."""
    return [
        Tag(name="v1.2", commit_sha="c12"),
        Tag(name="v1.1", commit_sha="c11"),
        Tag(name="v1.0", commit_sha="c10"),
        Tag(name="v0.9", commit_sha="c09"),
        Tag(name="v0.8", commit_sha="c08"),
    ]


@pytest.fixture
def release_dates():
    return {
        "c12": utc(2022, 3, 1),
        "c11": utc(2022, 2, 1),
        "c10": utc(2022, 1, 1),
        "c09": utc(2021, 12, 1),
        "c08": utc(2021, 11, 1),
    }
