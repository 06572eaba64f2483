"""
Rate limit tracking for GitHub API requests.

PyGithub already retries failed requests; this module only keeps track of the
X-RateLimit headers of the last response so that long report runs tell the
user when the quota is close to running out.
"""

import time
from dataclasses import dataclass
from typing import Any

from loguru import logger


@dataclass
class RateLimitStatus:
    """Current rate limit status from GitHub API."""

    limit: int  # Total requests allowed per hour
    remaining: int  # Requests remaining in current window
    reset_time: int  # Unix timestamp when limit resets

    @property
    def used(self) -> int:
        return self.limit - self.remaining

    @property
    def usage_percentage(self) -> float:
        """Percentage of rate limit used (0.0 to 1.0)."""
        if self.limit <= 0:
            return 0.0
        return self.used / self.limit

    @property
    def minutes_until_reset(self) -> float:
        """Minutes until rate limit resets."""
        return max(0, (self.reset_time - time.time()) / 60)


class RateLimitManager:
    """Records the rate limit status reported by a PyGithub client."""

    def __init__(self, safety_buffer: int = 100):
        """
        Initialize rate limit manager.

        Args:
            safety_buffer: Remaining request count below which a warning is logged
        """
        self.safety_buffer = safety_buffer
        self.last_status: RateLimitStatus | None = None
        self._warned = False

    def update_from_github(self, github: Any) -> RateLimitStatus | None:
        """
        Read the rate limit values PyGithub parsed from the last response.

        Args:
            github: github.Github instance that just made a request

        Returns:
            RateLimitStatus or None if the values are not usable
        """
        try:
            remaining, limit = github.rate_limiting
            reset_time = int(github.rate_limiting_resettime)
            status = RateLimitStatus(
                limit=int(limit), remaining=int(remaining), reset_time=reset_time
            )
        except (TypeError, ValueError) as e:
            logger.debug(f"Rate limit values unavailable: {e}")
            return None

        self.last_status = status
        self._log_status(status)
        return status

    def _log_status(self, status: RateLimitStatus) -> None:
        logger.debug(
            f"Rate limit: {status.remaining}/{status.limit} remaining "
            f"({status.usage_percentage:.1%} used, "
            f"resets in {status.minutes_until_reset:.1f}m)"
        )

        # Warn once per run, the status is refreshed after every page
        if status.remaining <= self.safety_buffer and not self._warned:
            self._warned = True
            logger.warning(
                f"GitHub rate limit nearly exhausted: {status.remaining} requests "
                f"left, resets in {status.minutes_until_reset:.1f} minutes"
            )

    def format_status_summary(self) -> str:
        """Get a formatted summary of current rate limit status."""
        if self.last_status is None:
            return "Rate limit status: Unknown"

        status = self.last_status
        return (
            f"Rate limit: {status.remaining}/{status.limit} remaining "
            f"({status.usage_percentage:.1%} used), "
            f"resets in {status.minutes_until_reset:.1f} minutes"
        )
