"""
Configuration system for contributor statistics.

The policy tables (fork allow-list, ignored bot accounts, staff cutoff dates)
live in a JSON file so they can be swapped without touching code. The bundled
``stats_config.json`` is used unless another path is given.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from types import MappingProxyType
from typing import Any

from ..shared_utilities import get_logger
from .exceptions import ConfigError

DEFAULT_CONFIG_FILE = Path(__file__).parent / "stats_config.json"

REQUIRED_KEYS = ("organization", "main_repository")


@dataclass(frozen=True)
class StatsConfig:
    """Immutable configuration for one report run."""

    organization: str
    main_repository: str
    included_forks: frozenset[str] = frozenset()
    ignored_usernames: frozenset[str] = frozenset()
    staff_until: Mapping[str, datetime] = field(
        default_factory=lambda: MappingProxyType({})
    )
    per_page: int = 100
    max_retries: int = 3


def parse_cutoff(value: str) -> datetime:
    """Parse a staff cutoff date ("2022-04-11" or a full ISO timestamp) as UTC."""
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _name_set(data: dict[str, Any], key: str) -> frozenset[str]:
    value = data.get(key)
    if value is None:
        return frozenset()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{key} must be a list of names")
    return frozenset(value)


def config_from_dict(data: dict[str, Any]) -> StatsConfig:
    """
    Build a StatsConfig from decoded JSON.

    Raises:
        ConfigError: If required keys are missing or a value is malformed
    """
    missing = [key for key in REQUIRED_KEYS if not data.get(key)]
    if missing:
        raise ConfigError(f"Missing required config keys: {', '.join(missing)}")

    staff_until = {}
    for login, value in (data.get("staff_until") or {}).items():
        try:
            staff_until[login] = parse_cutoff(str(value))
        except ValueError as e:
            raise ConfigError(f"Invalid staff cutoff for {login}: {value}") from e

    try:
        per_page = int(data.get("per_page", 100))
        max_retries = int(data.get("max_retries", 3))
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid numeric setting: {e}") from e

    if not 1 <= per_page <= 100:
        raise ConfigError(f"per_page must be between 1 and 100, got {per_page}")

    return StatsConfig(
        organization=data["organization"],
        main_repository=data["main_repository"],
        included_forks=_name_set(data, "included_forks"),
        ignored_usernames=_name_set(data, "ignored_usernames"),
        staff_until=MappingProxyType(staff_until),
        per_page=per_page,
        max_retries=max_retries,
    )


def load_config(config_file: str | Path | None = None) -> StatsConfig:
    """Load configuration from a JSON file.

    Args:
        config_file: Path to configuration file, defaults to the bundled one

    Raises:
        ConfigError: If the file cannot be read or is invalid
    """
    logger = get_logger(__name__)
    path = Path(config_file) if config_file else DEFAULT_CONFIG_FILE

    try:
        with open(path) as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")

    config = config_from_dict(data)
    logger.debug(
        f"Loaded config for {config.organization} from {path}",
        included_forks=len(config.included_forks),
        staff_records=len(config.staff_until),
    )
    return config
