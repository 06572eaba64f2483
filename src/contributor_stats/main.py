"""
Main CLI entry point for contributor statistics.
"""

import sys

import click
from dotenv import load_dotenv

from ..shared_utilities import configure_logging, get_logger
from ..shared_utilities.telemetry import trace_function
from .config import load_config
from .core import ContributorStatsCalculator
from .github_client import GitHubClient
from .output_formatter import ContributorReportFormatter

# Load environment variables from .env file
load_dotenv()

TOKEN_TIP = (
    "You need a GitHub Personal Access Token with 'read:org' scope to run this "
    "tool.\nYou can create a classic token at https://github.com/settings/tokens/new"
)


class ProgressIndicator:
    """Echoes narration lines while the report is being computed."""

    def __init__(self, quiet: bool = False, err: bool = False):
        """Initialize progress indicator.

        Args:
            quiet: If True, suppress progress output
            err: Write to stderr, used when stdout carries JSON
        """
        self.quiet = quiet
        self.err = err

    def update(self, message: str) -> None:
        if not self.quiet:
            click.echo(message, err=self.err)


def prompt_for_token() -> str:
    click.secho(TOKEN_TIP, fg="green", err=True)
    return click.prompt("GitHub Personal Access Token", hide_input=True, err=True)


@click.command()
@click.option(
    "-s",
    "--start-tag",
    help="The git tag used to calculate the start date (required)",
)
@click.option(
    "-e",
    "--end-tag",
    help="The git tag used to calculate the end date (default: now)",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Show commit counts per repository for every contributor",
)
@click.option(
    "-t",
    "--token",
    envvar="GITHUB_TOKEN",
    help="GitHub Personal Access Token (or set GITHUB_TOKEN env var)",
)
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    envvar="CONTRIBUTOR_STATS_CONFIG",
    help="Path to a stats config JSON file (default: bundled config)",
)
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
    show_default=True,
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    help="Suppress progress output",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    envvar="LOG_LEVEL",
    default="WARNING",
    help="Logging level for diagnostics written to stderr",
    show_default=True,
)
@click.pass_context
@trace_function("contributor_stats_main", include_args=True)
def main(
    ctx: click.Context,
    start_tag: str | None,
    end_tag: str | None,
    verbose: bool,
    token: str | None,
    config_file: str | None,
    output_format: str,
    quiet: bool,
    log_level: str,
) -> None:
    """
    Count commits by external contributors between two release tags.

    Reads every recently pushed public repository of the configured
    organization (plus allow-listed forks) and lists the people who are
    neither organization members nor staff at the time of their commits.

    Examples:

        # Contributors since v3.0.0
        contributor-stats --start-tag v3.0.0

        # Contributors between two releases with a per-repository breakdown
        contributor-stats -s v3.0.0 -e v3.1.0 --verbose
    """
    if not start_tag:
        click.echo(ctx.get_help())
        ctx.exit(1)

    configure_logging(level=log_level)
    logger = get_logger(__name__)

    try:
        config = load_config(config_file)

        if not token:
            token = prompt_for_token()

        client = GitHubClient(
            token=token, per_page=config.per_page, max_retries=config.max_retries
        )
        progress = ProgressIndicator(quiet=quiet, err=output_format == "json")
        calculator = ContributorStatsCalculator(
            client, config, progress_callback=progress.update
        )
        formatter = ContributorReportFormatter(verbose=verbose)

        report = calculator.calculate(start_tag, end_tag)
        click.echo(formatter.format(report, output_format))

        logger.debug(client.rate_limit_manager.format_status_summary())

    except (KeyboardInterrupt, click.Abort):
        # click.prompt turns Ctrl-C into Abort
        click.echo("Operation cancelled by user", err=True)
        sys.exit(130)
    except Exception as e:
        logger.opt(exception=e).debug("Contributor stats run failed")
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
