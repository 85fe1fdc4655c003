"""Team module service: team lifecycle and membership."""

from typing import List, Optional, Union

from ...config import TeamSettings
from ...core.enums import TeamRole, coerce_enum
from ...core.exceptions import (
    InvalidOperationError,
    NotFoundError,
    ReferentialIntegrityError,
    ValidationError,
)
from ...core.identity import TeamId, UserId
from ...utils.logging_config import get_logger
from ..user.contracts import UserLookup
from .models import TeamAggregate, TeamMember
from .repository import TeamRepository


class TeamService:
    """Team operations. Member user IDs are checked against the User module.

    Never commits; the caller's unit of work owns the transaction.
    """

    def __init__(
        self,
        repository: TeamRepository,
        users: UserLookup,
        settings: Optional[TeamSettings] = None,
    ):
        self.repository = repository
        self.users = users
        self.settings = settings or TeamSettings()
        self.logger = get_logger(__name__)

    def _validate(self, name: str, description: Optional[str]) -> None:
        s = self.settings
        length = len((name or "").strip())
        if not s.min_name_length <= length <= s.max_name_length:
            raise ValidationError(
                f"Team name must be between {s.min_name_length} and "
                f"{s.max_name_length} characters.",
                field="name",
            )
        if description is not None and len(description) > s.max_description_length:
            raise ValidationError(
                f"Team description cannot exceed {s.max_description_length} characters.",
                field="description",
            )

    async def _load(self, team_id: TeamId) -> TeamAggregate:
        team = await self.repository.get_by_id(team_id)
        if team is None:
            self.logger.warning(f"Team {team_id} not found")
            raise NotFoundError("Team", team_id)
        return team

    async def create_team(self, name: str, description: Optional[str] = None) -> TeamId:
        self.logger.info(f"Creating team '{name}'")
        self._validate(name, description)
        team = TeamAggregate(name, description)
        await self.repository.add(team)
        self.logger.info(f"Created team {team.id}")
        return team.id

    async def get_team(self, team_id: Union[TeamId, int, str]) -> TeamAggregate:
        """Get a team. Raises NotFoundError when absent."""
        return await self._load(TeamId.coerce(team_id))

    async def get_all_teams(self) -> List[TeamAggregate]:
        return await self.repository.get_all()

    async def update_team(
        self, team_id: Union[TeamId, int, str], name: str, description: Optional[str] = None
    ) -> None:
        team_id = TeamId.coerce(team_id)
        self.logger.info(f"Updating team {team_id}")
        self._validate(name, description)
        team = await self._load(team_id)
        team.update(name, description)
        await self.repository.update(team)
        self.logger.info(f"Updated team {team_id}")

    async def add_member_to_team(
        self,
        team_id: Union[TeamId, int, str],
        user_id: Union[UserId, int, str],
        role: TeamRole = TeamRole.MEMBER,
    ) -> None:
        team_id = TeamId.coerce(team_id)
        user_id = UserId.coerce(user_id)
        role = coerce_enum(TeamRole, role, "role")
        self.logger.info(f"Adding user {user_id} to team {team_id} as {role.name}")

        team = await self._load(team_id)

        self.logger.debug(f"Validating that user {user_id} exists")
        if not await self.users.user_exists(user_id):
            self.logger.warning(f"Cannot add user {user_id} to team {team_id}: user does not exist")
            raise ReferentialIntegrityError(
                f"User with ID '{user_id}' does not exist.", field="user_id"
            )

        if not team.has_member(user_id) and len(team.members) >= self.settings.max_team_members:
            self.logger.warning(f"Team {team_id} is full ({self.settings.max_team_members} members)")
            raise InvalidOperationError(
                f"Team cannot have more than {self.settings.max_team_members} members."
            )

        try:
            team.add_member(user_id, role)
        except ReferentialIntegrityError:
            self.logger.warning(f"User {user_id} is already a member of team {team_id}")
            raise

        await self.repository.update(team)
        self.logger.info(f"Added user {user_id} to team {team_id}")

    async def remove_member_from_team(
        self, team_id: Union[TeamId, int, str], user_id: Union[UserId, int, str]
    ) -> None:
        team_id = TeamId.coerce(team_id)
        user_id = UserId.coerce(user_id)
        self.logger.info(f"Removing user {user_id} from team {team_id}")

        team = await self._load(team_id)
        try:
            team.remove_member(user_id)
        except ReferentialIntegrityError:
            self.logger.warning(f"User {user_id} is not a member of team {team_id}")
            raise

        await self.repository.update(team)
        self.logger.info(f"Removed user {user_id} from team {team_id}")

    async def get_team_members(self, team_id: Union[TeamId, int, str]) -> List[TeamMember]:
        team = await self._load(TeamId.coerce(team_id))
        return list(team.members)

    async def team_exists(self, team_id: Union[TeamId, int, str]) -> bool:
        team_id = TeamId.coerce(team_id)
        exists = await self.repository.exists(team_id)
        self.logger.debug(f"Team {team_id} exists: {exists}")
        return exists

    async def get_team_member_ids(self, team_id: Union[TeamId, int, str]) -> List[UserId]:
        team = await self._load(TeamId.coerce(team_id))
        return team.member_ids
