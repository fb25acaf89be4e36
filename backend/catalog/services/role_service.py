"""Role service - role reference data and registration role policy"""

from sqlalchemy.orm import Session
from typing import Iterable, List, Optional, Set
from catalog.models.role import Role, RoleName
from catalog.core.exceptions import ConfigurationError
import logging

logger = logging.getLogger(__name__)

_ROLE_PREFIX = "ROLE_"


class RoleService:
    """Service for role lookup and seeding"""

    DEFAULT_ROLE = RoleName.USER

    @staticmethod
    def seed_roles(db: Session) -> int:
        """
        Ensure every RoleName has a row; safe to run on every startup

        Returns:
            Number of roles created
        """
        existing = {name for (name,) in db.query(Role.name).all()}
        missing = [role for role in RoleName if role.value not in existing]
        for role in missing:
            db.add(Role(name=role.value))
        if missing:
            db.commit()
            logger.info(f"Seeded roles: {', '.join(role.value for role in missing)}")
        return len(missing)

    @staticmethod
    def canonical_role(requested: str) -> RoleName:
        """
        Map a requested role name onto a RoleName.

        Matching ignores case and an optional ROLE_ prefix. Names that match
        nothing fall back to the default role.
        """
        key = requested.strip().upper()
        if key.startswith(_ROLE_PREFIX):
            key = key[len(_ROLE_PREFIX):]
        if key in RoleName.__members__:
            return RoleName[key]
        logger.warning(f"Unrecognized role name {requested!r}; assigning {RoleService.DEFAULT_ROLE.value}")
        return RoleService.DEFAULT_ROLE

    @staticmethod
    def resolve_requested_roles(requested: Optional[Iterable[str]]) -> Set[RoleName]:
        """Role names a new account receives; nothing requested means the default role"""
        resolved = {RoleService.canonical_role(name) for name in requested or ()}
        return resolved or {RoleService.DEFAULT_ROLE}

    @staticmethod
    def get_role(db: Session, name: RoleName) -> Role:
        """
        Load the row for a role name

        Raises:
            ConfigurationError: role reference data has not been seeded
        """
        role = db.query(Role).filter(Role.name == name.value).first()
        if role is None:
            logger.critical(f"Role {name.value} missing from roles table; seed reference data")
            raise ConfigurationError()
        return role

    @staticmethod
    def get_roles(db: Session, names: Iterable[RoleName]) -> List[Role]:
        return [RoleService.get_role(db, name) for name in sorted(names, key=lambda n: n.value)]


# Singleton instance
role_service = RoleService()
