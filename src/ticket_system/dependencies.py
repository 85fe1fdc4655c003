"""Per-request wiring of the module facades.

All repositories built here share the session of the request's unit of
work, so cross-module checks and the mutation they guard commit or roll
back together.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from .config import TicketSystemConfig, get_config
from .db.database import get_db
from .modules.issue.facade import IssueModuleApi
from .modules.issue.service import IssueService
from .modules.issue.sqlalchemy_repository import SQLAlchemyIssueRepository
from .modules.team.facade import TeamModuleApi
from .modules.team.service import TeamService
from .modules.team.sqlalchemy_repository import SQLAlchemyTeamRepository
from .modules.user.facade import UserModuleApi
from .modules.user.service import UserService
from .modules.user.sqlalchemy_repository import SQLAlchemyUserRepository


@dataclass
class ModuleContainer:
    """The three module facades for one unit of work."""

    users: UserModuleApi
    teams: TeamModuleApi
    issues: IssueModuleApi


def build_modules(db: Session, config: Optional[TicketSystemConfig] = None) -> ModuleContainer:
    """Wire services, repositories and facades onto one session."""
    config = config or get_config()

    users = UserModuleApi(UserService(SQLAlchemyUserRepository(db), config.user))
    teams = TeamModuleApi(TeamService(SQLAlchemyTeamRepository(db), users, config.team))
    issues = IssueModuleApi(
        IssueService(SQLAlchemyIssueRepository(db), users, teams, config.issue)
    )
    return ModuleContainer(users=users, teams=teams, issues=issues)


def get_module_container(db: Session = Depends(get_db)) -> ModuleContainer:
    """
    Main dependency injection point for the HTTP routers.

    Settings are read per request so configuration edits apply to the next
    request.
    """
    return build_modules(db, get_config())


def get_user_api(modules: ModuleContainer = Depends(get_module_container)) -> UserModuleApi:
    return modules.users


def get_team_api(modules: ModuleContainer = Depends(get_module_container)) -> TeamModuleApi:
    return modules.teams


def get_issue_api(modules: ModuleContainer = Depends(get_module_container)) -> IssueModuleApi:
    return modules.issues
