"""
Component logging for the ticket system.

Every module logs under ``ticket_system.<component>``. With a log directory
configured each component writes its own rotating file, and all of them
share ``unified.log``; errors also land in ``errors.log``. Without a log
directory records simply propagate to whatever the host configured.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any, Dict, NamedTuple, Optional

from ..config import get_config

LOGGER_NAMESPACE = "ticket_system"

DETAILED_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"
)
SIMPLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

MEGABYTE = 1024 * 1024


class _Component(NamedTuple):
    level: int
    filename: str


def _rotating_handler(path: Path, level: int, max_mb: int, backups: int) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=max_mb * MEGABYTE, backupCount=backups, encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(DETAILED_FORMAT))
    return handler


def _stderr_handler(level: int = logging.NOTSET) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(SIMPLE_FORMAT))
    return handler


class ComponentLogger:
    """Registry of per-component loggers."""

    COMPONENTS: Dict[str, _Component] = {
        "main": _Component(logging.INFO, "main.log"),
        "api": _Component(logging.INFO, "api.log"),
        "database": _Component(logging.INFO, "database.log"),
        "issue": _Component(logging.INFO, "issue.log"),
        "team": _Component(logging.INFO, "team.log"),
        "user": _Component(logging.INFO, "user.log"),
        "error": _Component(logging.ERROR, "errors.log"),
    }

    _loggers: Dict[str, logging.Logger] = {}
    _initialized = False
    _log_dir: Optional[Path] = None
    _debug = False
    _unified_handler: Optional[logging.Handler] = None

    @classmethod
    def initialize(cls, log_dir: Optional[str] = None, debug: Optional[bool] = None) -> None:
        """
        Set up every known component once.

        ``log_dir`` and ``debug`` fall back to ``config.app.log_dir`` and
        ``config.app.log_level``. Call ``reset`` first to switch modes.
        """
        if cls._initialized:
            return

        app = get_config().app
        cls._debug = debug if debug is not None else app.log_level.upper() == "DEBUG"
        directory = log_dir or app.log_dir
        if directory:
            cls._log_dir = Path(directory)
            cls._log_dir.mkdir(parents=True, exist_ok=True)
            cls._unified_handler = _rotating_handler(
                cls._log_dir / "unified.log",
                logging.DEBUG if cls._debug else logging.INFO,
                max_mb=20,
                backups=3,
            )

        # set before building so get_logger inside _build does not recurse
        cls._initialized = True
        for name in cls.COMPONENTS:
            cls._build(name)

        cls._loggers["main"].info(
            "Logging initialized (log_dir=%s, debug=%s)", cls._log_dir, cls._debug
        )

    @classmethod
    def _build(cls, component: str) -> logging.Logger:
        spec = cls.COMPONENTS.get(component, _Component(logging.INFO, f"{component}.log"))
        level = logging.DEBUG if cls._debug else spec.level

        logger = logging.getLogger(f"{LOGGER_NAMESPACE}.{component}")
        logger.handlers.clear()
        logger.setLevel(level)

        if cls._log_dir is None:
            logger.propagate = True
            cls._ensure_namespace_console()
        else:
            logger.propagate = False
            logger.addHandler(
                _rotating_handler(cls._log_dir / spec.filename, level, max_mb=10, backups=5)
            )
            if cls._unified_handler is not None:
                logger.addHandler(cls._unified_handler)
            if component in ("main", "error"):
                logger.addHandler(_stderr_handler(logging.ERROR))

        cls._loggers[component] = logger
        return logger

    @staticmethod
    def _ensure_namespace_console() -> None:
        parent = logging.getLogger(LOGGER_NAMESPACE)
        if not parent.handlers:
            parent.addHandler(_stderr_handler())
            parent.propagate = True

    @classmethod
    def get_logger(cls, component: str) -> logging.Logger:
        """Return the logger for a component name or a ``ticket_system.*`` module path."""
        if not cls._initialized:
            cls.initialize()

        component = cls._component_for(component)
        logger = cls._loggers.get(component)
        return logger if logger is not None else cls._build(component)

    @staticmethod
    def _component_for(name: str) -> str:
        """
        ``ticket_system.modules.<m>.*`` maps to ``<m>``; ``api`` and
        ``dependencies`` map to ``api``; ``db`` maps to ``database``; any
        other package module maps to ``main``. Bare names pass through.
        """
        parts = name.split(".")
        if parts[0] != LOGGER_NAMESPACE or len(parts) < 2:
            return name
        if parts[1] == "modules" and len(parts) >= 3:
            return parts[2]
        return {"api": "api", "dependencies": "api", "db": "database"}.get(parts[1], "main")

    @classmethod
    def log_exception(
        cls, component: str, exc: Exception, context: Optional[Dict[str, Any]] = None
    ) -> None:
        """Record ``exc`` on the component logger and on the shared error logger."""
        summary = f"{type(exc).__name__}: {exc}"
        if context:
            summary += " | Context: " + ", ".join(f"{key}={value}" for key, value in context.items())

        owner = cls.get_logger(component)
        owner.error(f"Exception in {component}: {summary}", exc_info=exc)

        errors = cls.get_logger("error")
        if errors is not owner:
            errors.error(f"[{component}] {summary}", exc_info=exc)

    @classmethod
    def get_log_directory(cls) -> Optional[Path]:
        return cls._log_dir

    @classmethod
    def reset(cls) -> None:
        """Close every handler and return to the uninitialized state."""
        for logger in cls._loggers.values():
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
                handler.close()
        if cls._unified_handler is not None:
            cls._unified_handler.close()
        cls._loggers = {}
        cls._unified_handler = None
        cls._log_dir = None
        cls._initialized = False


def get_logger(component: str) -> logging.Logger:
    return ComponentLogger.get_logger(component)


def get_module_logger(module_name: str) -> logging.Logger:
    """Same as ``get_logger``; reads better with ``__name__``."""
    return ComponentLogger.get_logger(module_name)


def initialize_logging(log_dir: Optional[str] = None, debug: Optional[bool] = None) -> None:
    ComponentLogger.initialize(log_dir=log_dir, debug=debug)


def log_exception(component: str, exc: Exception, context: Optional[Dict[str, Any]] = None) -> None:
    ComponentLogger.log_exception(component, exc, context)


def get_log_directory() -> Optional[Path]:
    return ComponentLogger.get_log_directory()
