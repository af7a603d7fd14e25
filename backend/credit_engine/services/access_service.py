"""
Access Service - identity, role and team-directory lookups.

Authentication happens elsewhere; this service only answers "who is this
actor, what is their role, which team are they on, who leads that team"
and enforces the role rules shared by the write paths.
"""

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from credit_engine.errors import NotFoundError, PermissionDeniedError
from credit_engine.models.models import Role, Team, User

MANAGER_ROLES = (Role.ADMIN.value, Role.OWNER.value)


@dataclass(frozen=True)
class Actor:
    """The user performing an action."""
    user_id: str
    role: str
    team_id: Optional[str] = None

    @property
    def is_owner(self) -> bool:
        return self.role == Role.OWNER.value

    @property
    def is_manager(self) -> bool:
        return self.role in MANAGER_ROLES

    @classmethod
    def from_user(cls, user: User) -> "Actor":
        return cls(user_id=user.id, role=user.role, team_id=user.team_id)


class AccessService:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: str) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFoundError(f"User {user_id} not found")
        return user

    def get_team(self, team_id: str) -> Team:
        team = self.db.query(Team).filter(Team.id == team_id).first()
        if not team:
            raise NotFoundError(f"Team {team_id} not found")
        return team

    def get_actor(self, user_id: str) -> Actor:
        return Actor.from_user(self.get_user(user_id))

    def team_lead_id(self, team_id: str) -> Optional[str]:
        return self.get_team(team_id).lead_id

    @staticmethod
    def can_manage_user(actor: Actor, target: User) -> bool:
        """Owners manage everyone; admins manage members only."""
        if actor.is_owner:
            return True
        if actor.role == Role.ADMIN.value:
            return target.role == Role.MEMBER.value
        return False

    @staticmethod
    def require_manager(actor: Actor) -> None:
        if not actor.is_manager:
            raise PermissionDeniedError("Only admins and owners can do that")

    @staticmethod
    def require_owner(actor: Actor) -> None:
        if not actor.is_owner:
            raise PermissionDeniedError("Only owners can do that")
