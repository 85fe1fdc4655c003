"""SQLAlchemy implementation of the Issue repository."""

from typing import List, Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session

from ...core.identity import IssueId, TeamId, UserId, raw_id
from .models import IssueAggregate
from .repository import IssueRepository

_NEWEST_FIRST = (desc(IssueAggregate._created_date), desc(IssueAggregate._id))


class SQLAlchemyIssueRepository(IssueRepository):
    """Issue repository on the request's session. Never commits."""

    def __init__(self, session: Session):
        self._session = session

    async def get_by_id(self, issue_id: IssueId) -> Optional[IssueAggregate]:
        return self._session.get(IssueAggregate, raw_id(issue_id))

    async def get_all(self) -> List[IssueAggregate]:
        return self._session.query(IssueAggregate).order_by(*_NEWEST_FIRST).all()

    async def get_by_user_id(self, user_id: UserId) -> List[IssueAggregate]:
        return (
            self._session.query(IssueAggregate)
            .filter(IssueAggregate._assigned_user_id == raw_id(user_id))
            .order_by(*_NEWEST_FIRST)
            .all()
        )

    async def get_by_team_id(self, team_id: TeamId) -> List[IssueAggregate]:
        return (
            self._session.query(IssueAggregate)
            .filter(IssueAggregate._assigned_team_id == raw_id(team_id))
            .order_by(*_NEWEST_FIRST)
            .all()
        )

    async def exists(self, issue_id: IssueId) -> bool:
        return (
            self._session.query(IssueAggregate._id)
            .filter(IssueAggregate._id == raw_id(issue_id))
            .first()
            is not None
        )

    async def add(self, issue: IssueAggregate) -> IssueAggregate:
        self._session.add(issue)
        self._session.flush()
        return issue

    async def update(self, issue: IssueAggregate) -> None:
        if issue not in self._session:
            self._session.add(issue)
        self._session.flush()

    async def delete(self, issue: IssueAggregate) -> None:
        self._session.delete(issue)
        self._session.flush()
