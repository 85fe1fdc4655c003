"""Unit tests for configuration loading, overrides and validation."""

import json
import os

import pytest

from ticket_system.config import (
    ConfigManager,
    IssueSettings,
    TeamSettings,
    TicketSystemConfig,
    UserSettings,
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("TICKET_SYSTEM_DATABASE_URL", "TICKET_SYSTEM_DEBUG", "TICKET_SYSTEM_LOG_DIR"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def config_file(tmp_path):
    return tmp_path / "config.json"


@pytest.mark.unit
class TestConfigDefaults:
    """Default settings of each module."""

    def test_module_defaults(self):
        config = TicketSystemConfig()

        assert config.issue == IssueSettings(
            min_title_length=3,
            max_title_length=200,
            max_description_length=5000,
            allow_no_due_date=True,
            default_priority="Medium",
        )
        assert config.team.max_team_members == 100
        assert config.team.min_name_length == 2
        assert config.user.max_first_name_length == 30
        assert config.user.allow_permanent_delete is False

    def test_allowed_domains_parsing(self):
        assert UserSettings().allowed_domains == []
        assert UserSettings(allowed_email_domains=" Example.com, ,corp.io ").allowed_domains == [
            "example.com",
            "corp.io",
        ]

    def test_round_trip_through_dict(self):
        config = TicketSystemConfig()
        config.team.max_team_members = 5
        assert TicketSystemConfig.from_dict(config.to_dict()) == config

    def test_unknown_keys_are_ignored(self):
        config = TicketSystemConfig.from_dict({"issue": {"max_title_length": 80, "bogus": 1}})
        assert config.issue.max_title_length == 80


@pytest.mark.unit
class TestConfigManager:
    """Loading, saving and environment overrides."""

    def test_missing_file_gives_defaults(self, clean_env, config_file):
        manager = ConfigManager(config_file)
        assert manager.load_config() == TicketSystemConfig()

    def test_loads_file(self, clean_env, config_file):
        config_file.write_text(json.dumps({"issue": {"max_title_length": 120}}))
        manager = ConfigManager(config_file)
        assert manager.load_config().issue.max_title_length == 120

    def test_invalid_json_falls_back_to_defaults(self, clean_env, config_file):
        config_file.write_text("{not json")
        manager = ConfigManager(config_file)
        assert manager.load_config() == TicketSystemConfig()

    def test_environment_overrides(self, clean_env, config_file, tmp_path):
        clean_env.setenv("TICKET_SYSTEM_DATABASE_URL", "sqlite:///override.db")
        clean_env.setenv("TICKET_SYSTEM_DEBUG", "true")
        clean_env.setenv("TICKET_SYSTEM_LOG_DIR", str(tmp_path / "logs"))

        config = ConfigManager(config_file).load_config()

        assert config.database.url == "sqlite:///override.db"
        assert config.server.debug is True
        assert config.app.log_level == "DEBUG"
        assert config.app.log_dir == str(tmp_path / "logs")

    def test_config_file_from_environment(self, clean_env, config_file):
        clean_env.setenv("TICKET_SYSTEM_CONFIG_FILE", str(config_file))
        assert ConfigManager().get_config_file_path() == config_file

    def test_cached_until_file_changes(self, clean_env, config_file):
        config_file.write_text(json.dumps({"team": {"max_team_members": 10}}))
        manager = ConfigManager(config_file)
        first = manager.load_config()
        assert manager.load_config() is first

        config_file.write_text(json.dumps({"team": {"max_team_members": 20}}))
        stat = config_file.stat()
        os.utime(config_file, (stat.st_atime, stat.st_mtime + 10))

        assert manager.load_config().team.max_team_members == 20

    def test_save_and_update(self, clean_env, config_file):
        manager = ConfigManager(config_file)
        assert manager.update_config({"issue.max_title_length": 150, "team": {"max_team_members": 7}})

        saved = json.loads(config_file.read_text())
        assert saved["issue"]["max_title_length"] == 150
        assert saved["team"]["max_team_members"] == 7
        assert manager.reload_config().issue.max_title_length == 150


@pytest.mark.unit
class TestConfigValidation:
    """Cross-field validation."""

    def test_defaults_are_valid(self, clean_env, config_file):
        assert ConfigManager(config_file).validate_config(TicketSystemConfig()) == []

    def test_inconsistent_min_max_pairs_are_reported(self, clean_env, config_file):
        config = TicketSystemConfig(
            issue=IssueSettings(min_title_length=10, max_title_length=5),
            team=TeamSettings(min_name_length=60, max_name_length=50, max_team_members=0),
            user=UserSettings(min_first_name_length=30, max_first_name_length=30),
        )

        problems = ConfigManager(config_file).validate_config(config)

        assert "Issue min_title_length must be less than max_title_length" in problems
        assert "Team min_name_length must be less than max_name_length" in problems
        assert "Team max_team_members must be at least 1" in problems
        assert "User min_first_name_length must be less than max_first_name_length" in problems

    def test_unknown_default_priority_is_reported(self, clean_env, config_file):
        config = TicketSystemConfig(issue=IssueSettings(default_priority="Urgent"))
        problems = ConfigManager(config_file).validate_config(config)
        assert any("default_priority" in p for p in problems)

    def test_missing_default_priority_is_reported(self, clean_env, config_file):
        config = TicketSystemConfig(issue=IssueSettings(default_priority=None))

        problems = ConfigManager(config_file).validate_config(config)

        assert "Issue default_priority 'None' is not a known priority" in problems
