"""
User roles and what each role may do.

Roles are a closed set. Every role must appear in both mapping tables; the
check at the bottom of this module fails at import time if one is missed.
"""

from enum import Enum


class UserRole(str, Enum):
    """Account role."""
    SUPER_ADMIN = "SUPER_ADMIN"  # Platform operator, belongs to no tenant
    ADMIN = "ADMIN"              # Tenant administrator, manages users
    MEMBER = "MEMBER"            # Tenant staff


class Permission(str, Enum):
    """Capabilities granted to roles."""
    PLATFORM_VIEW = "platform:view"
    TENANT_DATA = "tenant:data"
    TENANT_REPORTS = "tenant:reports"
    TENANT_SETTINGS = "tenant:settings"
    USERS_MANAGE = "users:manage"


# Where the SPA should land a freshly signed-in user
ROLE_HOME_PATHS: dict[UserRole, str] = {
    UserRole.SUPER_ADMIN: "/superadmin/dashboard",
    UserRole.ADMIN: "/dashboard",
    UserRole.MEMBER: "/dashboard",
}

ROLE_PERMISSIONS: dict[UserRole, frozenset[Permission]] = {
    UserRole.SUPER_ADMIN: frozenset({Permission.PLATFORM_VIEW}),
    UserRole.ADMIN: frozenset({
        Permission.TENANT_DATA,
        Permission.TENANT_REPORTS,
        Permission.TENANT_SETTINGS,
        Permission.USERS_MANAGE,
    }),
    UserRole.MEMBER: frozenset({
        Permission.TENANT_DATA,
        Permission.TENANT_REPORTS,
        Permission.TENANT_SETTINGS,
    }),
}

# Roles an ADMIN may assign through user management
ASSIGNABLE_ROLES: frozenset[UserRole] = frozenset({UserRole.ADMIN, UserRole.MEMBER})


def _check_exhaustive() -> None:
    for table_name, table in (("ROLE_HOME_PATHS", ROLE_HOME_PATHS), ("ROLE_PERMISSIONS", ROLE_PERMISSIONS)):
        missing = set(UserRole) - set(table)
        if missing:
            raise RuntimeError(f"{table_name} has no entry for {sorted(r.value for r in missing)}")


_check_exhaustive()
