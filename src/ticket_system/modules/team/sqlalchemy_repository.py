"""SQLAlchemy implementation of the Team repository."""

from typing import List, Optional

from sqlalchemy.orm import Session

from ...core.identity import TeamId, raw_id
from .models import TeamAggregate
from .repository import TeamRepository


class SQLAlchemyTeamRepository(TeamRepository):
    """Team repository on the request's session. Never commits."""

    def __init__(self, session: Session):
        self._session = session

    async def get_by_id(self, team_id: TeamId) -> Optional[TeamAggregate]:
        return self._session.get(TeamAggregate, raw_id(team_id))

    async def get_all(self) -> List[TeamAggregate]:
        return self._session.query(TeamAggregate).order_by(TeamAggregate._id).all()

    async def exists(self, team_id: TeamId) -> bool:
        return (
            self._session.query(TeamAggregate._id)
            .filter(TeamAggregate._id == raw_id(team_id))
            .first()
            is not None
        )

    async def add(self, team: TeamAggregate) -> TeamAggregate:
        self._session.add(team)
        self._session.flush()
        return team

    async def update(self, team: TeamAggregate) -> None:
        if team not in self._session:
            self._session.add(team)
        self._session.flush()
