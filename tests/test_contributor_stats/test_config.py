"""Tests for the statistics configuration."""

import json
from datetime import datetime, timezone

import pytest

from src.contributor_stats.config import (
    DEFAULT_CONFIG_FILE,
    StatsConfig,
    config_from_dict,
    load_config,
    parse_cutoff,
)
from src.contributor_stats.exceptions import ConfigError


class TestLoadConfig:
    """Test loading configuration files."""

    def test_bundled_config(self):
        """Test that the bundled config loads with its policy tables."""
        config = load_config()

        assert DEFAULT_CONFIG_FILE.exists()
        assert config.organization == "discourse"
        assert config.main_repository == "discourse/discourse"
        assert "discourse-akismet" in config.included_forks
        assert "dependabot[bot]" in config.ignored_usernames
        assert config.staff_until["riking"] == datetime(2021, 7, 14, tzinfo=timezone.utc)
        assert config.per_page == 100

    def test_custom_config_file(self, tmp_path):
        """Test loading a config from an explicit path."""
        path = tmp_path / "stats.json"
        path.write_text(
            json.dumps(
                {
                    "organization": "acme",
                    "main_repository": "acme/core",
                    "staff_until": {"pat": "2023-05-01T12:00:00Z"},
                }
            )
        )

        config = load_config(path)

        assert config.organization == "acme"
        assert config.included_forks == frozenset()
        assert config.staff_until["pat"] == datetime(2023, 5, 1, 12, tzinfo=timezone.utc)

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises ConfigError."""
        with pytest.raises(ConfigError, match="Config file not found"):
            load_config(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        """Test that malformed JSON raises ConfigError."""
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with pytest.raises(ConfigError, match="not valid JSON"):
            load_config(path)

    def test_non_object_json(self, tmp_path):
        """Test that a JSON list is rejected."""
        path = tmp_path / "list.json"
        path.write_text("[]")

        with pytest.raises(ConfigError, match="must contain a JSON object"):
            load_config(path)


class TestConfigFromDict:
    """Test validation of decoded config data."""

    def test_missing_required_keys(self):
        """Test that organization and main repository are required."""
        with pytest.raises(ConfigError, match="organization, main_repository"):
            config_from_dict({})

    def test_bad_cutoff_date(self):
        """Test that an unparseable staff date names the login."""
        with pytest.raises(ConfigError, match="Invalid staff cutoff for pat"):
            config_from_dict(
                {
                    "organization": "acme",
                    "main_repository": "acme/core",
                    "staff_until": {"pat": "last tuesday"},
                }
            )

    def test_per_page_range(self):
        """Test that GitHub's page size limit is enforced."""
        with pytest.raises(ConfigError, match="per_page"):
            config_from_dict(
                {"organization": "acme", "main_repository": "acme/core", "per_page": 500}
            )

    @pytest.mark.parametrize("key", ["included_forks", "ignored_usernames"])
    def test_name_tables_must_be_lists(self, key):
        """Test that a bare string is rejected instead of split into characters."""
        with pytest.raises(ConfigError, match=f"{key} must be a list of names"):
            config_from_dict(
                {"organization": "acme", "main_repository": "acme/core", key: "renovate"}
            )

    def test_config_is_immutable(self):
        """Test that the policy tables cannot be changed after loading."""
        config = config_from_dict(
            {
                "organization": "acme",
                "main_repository": "acme/core",
                "staff_until": {"pat": "2023-05-01"},
            }
        )

        assert isinstance(config, StatsConfig)
        with pytest.raises(TypeError):
            config.staff_until["someone"] = datetime.now(timezone.utc)
        with pytest.raises(AttributeError):
            config.organization = "other"


class TestParseCutoff:
    """Test parse_cutoff."""

    def test_date_only_is_utc_midnight(self):
        assert parse_cutoff("2022-04-11") == datetime(2022, 4, 11, tzinfo=timezone.utc)

    def test_offset_is_kept(self):
        parsed = parse_cutoff("2022-04-11T10:00:00+02:00")
        assert parsed == datetime(2022, 4, 11, 8, tzinfo=timezone.utc)
