"""Pytest configuration and shared fixtures."""

import os
import tempfile
from pathlib import Path
from types import SimpleNamespace
from typing import Dict, Generator, Optional

# Keep a developer's ./data/config.json out of the test run
os.environ.setdefault(
    "TICKET_SYSTEM_CONFIG_FILE",
    str(Path(tempfile.gettempdir()) / "ticket-system-tests-missing-config.json"),
)

import pytest
from alembic import command
from alembic.config import Config
from fastapi.testclient import TestClient
from sqlalchemy import text
from sqlalchemy.orm import sessionmaker

from ticket_system.config import IssueSettings, TeamSettings, UserSettings
from ticket_system.db.database import create_database_engine
from ticket_system.db.unit_of_work import UnitOfWork
from ticket_system.modules.issue.facade import IssueModuleApi
from ticket_system.modules.issue.memory_repository import MemoryIssueRepository
from ticket_system.modules.issue.service import IssueService
from ticket_system.modules.team.facade import TeamModuleApi
from ticket_system.modules.team.memory_repository import MemoryTeamRepository
from ticket_system.modules.team.service import TeamService
from ticket_system.modules.user.facade import UserModuleApi
from ticket_system.modules.user.memory_repository import MemoryUserRepository
from ticket_system.modules.user.service import UserService

# Child tables first
_TABLES = ("issues", "team_members", "teams", "users")


def _project_root() -> Path:
    """Return the repository root path."""
    return Path(__file__).resolve().parents[1]


def _run_alembic_migrations(db_url: str) -> None:
    """Run Alembic migrations programmatically for the test database."""
    alembic_cfg = Config()
    alembic_cfg.set_main_option("script_location", str(_project_root() / "alembic"))
    alembic_cfg.set_main_option("sqlalchemy.url", db_url)
    command.upgrade(alembic_cfg, "head")


@pytest.fixture(scope="session")
def setup_test_env() -> Generator[str, None, None]:
    """Create a temporary SQLite database and migrate it to head."""
    temp_db = tempfile.NamedTemporaryFile(suffix=".db", delete=False)
    temp_db.close()
    db_url = f"sqlite:///{temp_db.name}"

    original_env: Dict[str, Optional[str]] = {}
    for key, value in {"TICKET_SYSTEM_DATABASE_URL": db_url}.items():
        original_env[key] = os.environ.get(key)
        os.environ[key] = value

    try:
        _run_alembic_migrations(db_url)
        yield db_url
    finally:
        for key, original_value in original_env.items():
            if original_value is not None:
                os.environ[key] = original_value
            else:
                os.environ.pop(key, None)
        Path(temp_db.name).unlink(missing_ok=True)


@pytest.fixture
def test_db(setup_test_env):
    """Session factory bound to the migrated database; tables are emptied afterwards."""
    engine = create_database_engine(setup_test_env)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    yield TestingSessionLocal

    with engine.begin() as conn:
        for table in _TABLES:
            conn.execute(text(f"DELETE FROM {table}"))
    engine.dispose()


@pytest.fixture
def db_session(test_db):
    """A plain session for repository tests. Nothing is committed unless a test does."""
    session = test_db()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def client(test_db) -> Generator[TestClient, None, None]:
    """Test client whose requests each run in their own unit of work."""
    from ticket_system.main import app
    from ticket_system.db.database import get_db

    def override_get_db():
        with UnitOfWork(test_db) as uow:
            yield uow.session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def build_memory_modules(
    issue_settings: Optional[IssueSettings] = None,
    team_settings: Optional[TeamSettings] = None,
    user_settings: Optional[UserSettings] = None,
) -> SimpleNamespace:
    """Wire all three modules onto in-memory repositories."""
    user_repo = MemoryUserRepository()
    team_repo = MemoryTeamRepository()
    issue_repo = MemoryIssueRepository()

    user_service = UserService(user_repo, user_settings)
    users = UserModuleApi(user_service)
    team_service = TeamService(team_repo, users, team_settings)
    teams = TeamModuleApi(team_service)
    issue_service = IssueService(issue_repo, users, teams, issue_settings)
    issues = IssueModuleApi(issue_service)

    return SimpleNamespace(
        user_repo=user_repo,
        team_repo=team_repo,
        issue_repo=issue_repo,
        user_service=user_service,
        team_service=team_service,
        issue_service=issue_service,
        users=users,
        teams=teams,
        issues=issues,
    )


@pytest.fixture
def modules() -> SimpleNamespace:
    """In-memory modules with default settings."""
    return build_memory_modules()


@pytest.fixture
def module_factory():
    """Build in-memory modules with custom settings."""
    return build_memory_modules
