"""
Configuration management for the ticket system.

Settings are plain dataclasses grouped under ``TicketSystemConfig``. They
are loaded from a JSON file (if present) with environment overrides on
top. The loaded configuration is cached and reloaded when the file
changes on disk, so each request picks up the current module settings.
"""

import json
import logging
import os
from dataclasses import dataclass, asdict, field, fields
from pathlib import Path
from typing import Dict, Any, Optional, List

from .core.enums import IssuePriority


@dataclass
class DatabaseConfig:
    """Database configuration."""

    url: str = "sqlite:///./ticket_system.db"
    echo: bool = False
    log_queries: bool = False  # Slow-query logging via engine events


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False


@dataclass
class AppConfig:
    """Main application configuration."""

    app_name: str = "Ticket System"
    version: str = "1.0.0"
    description: str = "Issue, Team and User tracking"
    log_dir: Optional[str] = None  # None -> console logging only
    log_level: str = "INFO"
    enable_cors: bool = True


@dataclass
class IssueSettings:
    """Validation and business rules for the Issue module."""

    min_title_length: int = 3
    max_title_length: int = 200
    max_description_length: int = 5000
    allow_no_due_date: bool = True
    default_priority: str = "Medium"


@dataclass
class TeamSettings:
    """Validation and business rules for the Team module."""

    min_name_length: int = 2
    max_name_length: int = 50
    max_description_length: int = 1000
    max_team_members: int = 100


@dataclass
class UserSettings:
    """Validation and security rules for the User module."""

    min_first_name_length: int = 1
    max_first_name_length: int = 30
    min_last_name_length: int = 1
    max_last_name_length: int = 30
    allowed_email_domains: str = ""  # Comma separated; empty allows any domain
    allow_permanent_delete: bool = False

    @property
    def allowed_domains(self) -> List[str]:
        return [
            domain.strip().lower()
            for domain in self.allowed_email_domains.split(",")
            if domain.strip()
        ]


def _section(cls, data: Optional[Dict[str, Any]]):
    """Build a config section, ignoring keys the dataclass does not know."""
    known = {f.name for f in fields(cls)}
    return cls(**{k: v for k, v in (data or {}).items() if k in known})


@dataclass
class TicketSystemConfig:
    """Complete ticket system configuration."""

    app: AppConfig = field(default_factory=AppConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    issue: IssueSettings = field(default_factory=IssueSettings)
    team: TeamSettings = field(default_factory=TeamSettings)
    user: UserSettings = field(default_factory=UserSettings)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TicketSystemConfig":
        """Create from dictionary."""
        return cls(
            app=_section(AppConfig, data.get("app")),
            server=_section(ServerConfig, data.get("server")),
            database=_section(DatabaseConfig, data.get("database")),
            issue=_section(IssueSettings, data.get("issue")),
            team=_section(TeamSettings, data.get("team")),
            user=_section(UserSettings, data.get("user")),
        )


def _env_flag(name: str) -> Optional[bool]:
    value = os.getenv(name)
    if value is None:
        return None
    return value.strip().lower() in ("1", "true", "yes", "on")


class ConfigManager:
    """Manages configuration loading, saving, and change detection."""

    def __init__(self, config_file: Optional[Path] = None):
        self.config_file: Optional[Path] = config_file
        self.config: Optional[TicketSystemConfig] = None
        self._loaded_mtime: Optional[float] = None

    def get_config_file_path(self) -> Path:
        """Get the path for the config file."""
        if self.config_file is not None:
            return self.config_file
        env_path = os.getenv("TICKET_SYSTEM_CONFIG_FILE")
        if env_path:
            return Path(env_path)
        return Path.cwd() / "data" / "config.json"

    def _apply_environment(self, config: TicketSystemConfig) -> TicketSystemConfig:
        """Apply environment variable overrides."""
        db_url = os.getenv("TICKET_SYSTEM_DATABASE_URL")
        if db_url:
            config.database.url = db_url

        debug = _env_flag("TICKET_SYSTEM_DEBUG")
        if debug is not None:
            config.server.debug = debug
            if debug:
                config.app.log_level = "DEBUG"

        log_dir = os.getenv("TICKET_SYSTEM_LOG_DIR")
        if log_dir:
            config.app.log_dir = log_dir

        return config

    def _file_mtime(self, path: Path) -> Optional[float]:
        try:
            return path.stat().st_mtime
        except OSError:
            return None

    def load_config(self) -> TicketSystemConfig:
        """Load configuration from file or create default.

        The cached configuration is reused until the file's modification
        time changes.
        """
        path = self.get_config_file_path()
        mtime = self._file_mtime(path)

        if self.config is not None and mtime == self._loaded_mtime:
            return self.config

        if mtime is not None:
            try:
                with open(path, "r", encoding="utf-8") as f:
                    data = json.load(f)
                config = TicketSystemConfig.from_dict(data)
                logging.info(f"Loaded configuration from {path}")
            except (OSError, ValueError, TypeError) as e:
                logging.warning(f"Failed to load config from {path}: {e}")
                logging.info("Falling back to default configuration")
                config = TicketSystemConfig()
        else:
            config = TicketSystemConfig()

        self.config = self._apply_environment(config)
        self._loaded_mtime = mtime
        return self.config

    def reload_config(self) -> TicketSystemConfig:
        """Drop the cached configuration and load it again."""
        self.config = None
        self._loaded_mtime = None
        return self.load_config()

    def save_config(self, config: Optional[TicketSystemConfig] = None) -> bool:
        """Save configuration to file."""
        if config is None:
            config = self.config

        if config is None:
            logging.error("No configuration to save")
            return False

        path = self.get_config_file_path()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config.to_dict(), f, indent=2, ensure_ascii=False)
        except OSError as e:
            logging.error(f"Failed to save config to {path}: {e}")
            return False

        self.config = config
        self._loaded_mtime = self._file_mtime(path)
        logging.info(f"Saved configuration to {path}")
        return True

    def update_config(self, updates: Dict[str, Any]) -> bool:
        """Update configuration with new values.

        Keys are either section names mapped to dicts, or dotted paths such
        as ``"issue.max_title_length"``.
        """
        config_dict = self.load_config().to_dict()

        for key, value in updates.items():
            if "." in key:
                section, name = key.split(".", 1)
                if section in config_dict:
                    config_dict[section][name] = value
            elif key in config_dict and isinstance(value, dict):
                config_dict[key].update(value)

        return self.save_config(TicketSystemConfig.from_dict(config_dict))

    def validate_config(self, config: Optional[TicketSystemConfig] = None) -> List[str]:
        """Validate configuration and return list of problems."""
        config = config or self.load_config()
        issues = []

        if config.issue.min_title_length < 1:
            issues.append("Issue min_title_length must be greater than zero")
        if config.issue.min_title_length >= config.issue.max_title_length:
            issues.append("Issue min_title_length must be less than max_title_length")
        if config.issue.max_description_length < 0:
            issues.append("Issue max_description_length cannot be negative")
        try:
            IssuePriority.from_name(config.issue.default_priority)
        except ValueError:
            issues.append(
                f"Issue default_priority '{config.issue.default_priority}' is not a known priority"
            )

        if config.team.min_name_length < 1:
            issues.append("Team min_name_length must be greater than zero")
        if config.team.min_name_length >= config.team.max_name_length:
            issues.append("Team min_name_length must be less than max_name_length")
        if config.team.max_team_members < 1:
            issues.append("Team max_team_members must be at least 1")

        if config.user.min_first_name_length >= config.user.max_first_name_length:
            issues.append("User min_first_name_length must be less than max_first_name_length")
        if config.user.min_last_name_length >= config.user.max_last_name_length:
            issues.append("User min_last_name_length must be less than max_last_name_length")

        if not config.database.url:
            issues.append("Database URL is empty")

        return issues

    def get_database_url(self) -> str:
        """Get the database URL."""
        return self.load_config().database.url


# Global config manager instance
config_manager = ConfigManager()


def get_config() -> TicketSystemConfig:
    """Get the current configuration."""
    return config_manager.load_config()


def reload_config() -> TicketSystemConfig:
    """Force a reload of the configuration."""
    return config_manager.reload_config()


def get_database_url() -> str:
    """Get the database URL."""
    return config_manager.get_database_url()


def validate_config() -> List[str]:
    """Validate the current configuration."""
    return config_manager.validate_config()
