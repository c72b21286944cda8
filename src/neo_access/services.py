"""Service wiring.

``AccessServices`` bundles one instance of every feature service built on a
single database handle. The application factory creates it once at startup;
nothing here is global.
"""

from dataclasses import dataclass

from .features.audit import AuditRepository, AuditService
from .features.grants import RoleGrantRepository, RoleGrantService
from .features.groups import GroupRepository, GroupService
from .features.memberships import MembershipRepository, MembershipService
from .features.users import UserRepository, UserService


@dataclass
class AccessServices:
    """The feature services of one running instance."""

    users: UserService
    groups: GroupService
    memberships: MembershipService
    grants: RoleGrantService
    audit: AuditService

    @classmethod
    def from_database(cls, database_service) -> "AccessServices":
        """Build every service on top of ``database_service``."""
        return cls(
            users=UserService(UserRepository(database_service)),
            groups=GroupService(GroupRepository(database_service)),
            memberships=MembershipService(MembershipRepository(database_service)),
            grants=RoleGrantService(RoleGrantRepository(database_service)),
            audit=AuditService(AuditRepository(database_service)),
        )
