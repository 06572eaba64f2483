"""Tests for repository selection."""

from datetime import datetime, timezone

from src.contributor_stats.repository_filter import select_repositories

START = datetime(2022, 1, 1, tzinfo=timezone.utc)


class TestSelectRepositories:
    """Test select_repositories."""

    def test_drops_repositories_pushed_before_start(self, make_repo):
        """Test that stale repositories are neither included nor ignored."""
        stale = make_repo("stale", datetime(2021, 12, 31, tzinfo=timezone.utc))
        stale_fork = make_repo(
            "stale-fork", datetime(2021, 6, 1, tzinfo=timezone.utc), is_fork=True
        )
        active = make_repo("active", datetime(2022, 1, 2, tzinfo=timezone.utc))

        selection = select_repositories([stale, stale_fork, active], START)

        assert selection.included == [active]
        assert selection.ignored == []

    def test_pushed_exactly_at_start_is_kept(self, make_repo):
        """Test the boundary: pushed_at equal to start date counts as recent."""
        repo = make_repo("edge", START)

        assert select_repositories([repo], START).included == [repo]

    def test_repository_without_pushes_is_dropped(self, make_repo):
        """Test that an empty repository with no push date is skipped."""
        assert select_repositories([make_repo("empty", None)], START).included == []

    def test_fork_partition(self, make_repo):
        """Test allow-listed forks are included and other forks ignored."""
        pushed = datetime(2022, 2, 1, tzinfo=timezone.utc)
        main = make_repo("core", pushed)
        allowed = make_repo("allowed-fork", pushed, is_fork=True)
        other = make_repo("random-fork", pushed, is_fork=True)

        selection = select_repositories([other, main, allowed], START, ["allowed-fork"])

        assert selection.included == [main, allowed]
        assert selection.ignored == [other]

    def test_allow_list_matches_short_name(self, make_repo):
        """Test that the allow-list is matched against the repository name."""
        fork = make_repo("allowed-fork", START, is_fork=True)

        selection = select_repositories([fork], START, ["acme/allowed-fork"])

        assert selection.included == []
        assert selection.ignored == [fork]
