"""
GitHub API client for the listings the contributor report needs.

Every listing returns a single ``Page`` whose ``next_cursor`` is handed back
to ``next_page``; PyGithub objects are converted into the frozen types of
``data_models`` at this boundary.
"""

import os
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any

from github import Auth, Github
from github.GithubRetry import GithubRetry
from github.Organization import Organization
from github.PaginatedList import PaginatedList
from github.Repository import Repository

from ..shared_utilities import RateLimitManager, get_logger, trace_operation
from .data_models import (
    CommitRecord,
    LinkedAuthor,
    Page,
    RepositorySummary,
    Tag,
    UnlinkedAuthor,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class PageCursor:
    """Position of the next page within a PyGithub listing."""

    listing: PaginatedList
    page_number: int
    convert: Callable[[Any], Any]
    description: str = ""


def as_utc(value: datetime) -> datetime:
    """Treat naive timestamps from the API as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class GitHubClient:
    """Client for interacting with GitHub API."""

    def __init__(
        self,
        token: str | None = None,
        per_page: int = 100,
        max_retries: int = 3,
        rate_limit_manager: RateLimitManager | None = None,
    ):
        """Initialize GitHub client with optional token.

        Args:
            token: Personal access token, falls back to GITHUB_TOKEN
            per_page: Page size requested for every listing (max 100)
            max_retries: Retries for server errors and secondary rate limits
            rate_limit_manager: Tracker updated after every page fetch
        """
        self.token = token or os.environ.get("GITHUB_TOKEN")
        self.per_page = per_page
        self.rate_limit_manager = rate_limit_manager or RateLimitManager()

        if self.token:
            logger.debug("Using authenticated GitHub client")
            auth = Auth.Token(self.token)
        else:
            logger.warning(
                "Using unauthenticated GitHub client, org members may be incomplete"
            )
            auth = None

        self.github = Github(
            auth=auth, per_page=per_page, retry=GithubRetry(total=max_retries)
        )

        self._repos: dict[str, Repository] = {}
        self._orgs: dict[str, Organization] = {}

    def _get_repo(self, full_name: str) -> Repository:
        if full_name not in self._repos:
            self._repos[full_name] = self.github.get_repo(full_name)
        return self._repos[full_name]

    def _get_org(self, name: str) -> Organization:
        if name not in self._orgs:
            self._orgs[name] = self.github.get_organization(name)
        return self._orgs[name]

    def _first_page(
        self, listing: PaginatedList, convert: Callable[[Any], Any], description: str
    ) -> Page:
        return self.next_page(PageCursor(listing, 0, convert, description))

    def next_page(self, cursor: PageCursor) -> Page:
        """
        Fetch the page a cursor points at.

        A short page is the last one; a full page may be followed by an empty
        one, which also ends the walk.

        Args:
            cursor: Cursor taken from a previous Page

        Returns:
            Page with converted items and the cursor of the following page
        """
        with trace_operation(
            "github.fetch_page",
            {"listing": cursor.description, "page": cursor.page_number},
        ):
            raw_items = cursor.listing.get_page(cursor.page_number)

        self.rate_limit_manager.update_from_github(self.github)

        items = [cursor.convert(item) for item in raw_items]
        next_cursor = None
        if len(raw_items) >= self.per_page:
            next_cursor = replace(cursor, page_number=cursor.page_number + 1)

        logger.debug(
            f"Fetched {len(items)} items from {cursor.description} "
            f"(page {cursor.page_number + 1})"
        )
        return Page(items=items, next_cursor=next_cursor)

    def list_tags(self, repo_full_name: str) -> Page:
        """List the first page of tags of a repository."""
        repo = self._get_repo(repo_full_name)
        return self._first_page(
            repo.get_tags(), self._convert_tag, f"tags of {repo_full_name}"
        )

    def get_commit_date(self, repo_full_name: str, sha: str) -> datetime:
        """Fetch a single commit by reference and return its committer timestamp."""
        commit = self._get_repo(repo_full_name).get_commit(sha)
        return as_utc(commit.commit.committer.date)

    def list_org_repositories(self, org: str) -> Page:
        """List the first page of public repositories of an organization."""
        return self._first_page(
            self._get_org(org).get_repos(type="public"),
            self._convert_repository,
            f"repositories of {org}",
        )

    def list_org_members(self, org: str) -> Page:
        """List the first page of organization member logins."""
        return self._first_page(
            self._get_org(org).get_members(),
            self._convert_member,
            f"members of {org}",
        )

    def list_commits(
        self, repo_full_name: str, since: datetime, until: datetime
    ) -> Page:
        """List the first page of commits of a repository within a date range."""
        repo = self._get_repo(repo_full_name)
        return self._first_page(
            repo.get_commits(since=since, until=until),
            self._convert_commit,
            f"commits of {repo_full_name}",
        )

    @staticmethod
    def _convert_tag(tag: Any) -> Tag:
        return Tag(name=tag.name, commit_sha=tag.commit.sha)

    @staticmethod
    def _convert_repository(repo: Any) -> RepositorySummary:
        return RepositorySummary(
            full_name=repo.full_name,
            name=repo.name,
            owner=repo.owner.login,
            is_fork=bool(repo.fork),
            pushed_at=as_utc(repo.pushed_at) if repo.pushed_at else None,
        )

    @staticmethod
    def _convert_member(member: Any) -> str:
        return member.login

    @staticmethod
    def _convert_commit(commit: Any) -> CommitRecord:
        git_commit = commit.commit
        if commit.author is not None and commit.author.login:
            author = LinkedAuthor(
                login=commit.author.login, html_url=commit.author.html_url
            )
        else:
            # Email not linked to any account, fall back to the recorded name
            author = UnlinkedAuthor(name=git_commit.author.name)

        return CommitRecord(
            sha=commit.sha,
            author=author,
            committed_at=as_utc(git_commit.committer.date),
            authored_at=as_utc(git_commit.author.date),
        )
