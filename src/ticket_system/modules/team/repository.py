"""Repository port for the Team module."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ...core.identity import TeamId
from .models import TeamAggregate


class TeamRepository(ABC):
    """Persistence operations for teams. Members are saved with their team."""

    @abstractmethod
    async def get_by_id(self, team_id: TeamId) -> Optional[TeamAggregate]:
        """Get a team (with members) by ID."""
        pass

    @abstractmethod
    async def get_all(self) -> List[TeamAggregate]:
        """Get all teams ordered by ID."""
        pass

    @abstractmethod
    async def exists(self, team_id: TeamId) -> bool:
        """Check whether a team exists."""
        pass

    @abstractmethod
    async def add(self, team: TeamAggregate) -> TeamAggregate:
        """Persist a new team and assign its identity."""
        pass

    @abstractmethod
    async def update(self, team: TeamAggregate) -> None:
        """Persist changes made to a team and its members."""
        pass
