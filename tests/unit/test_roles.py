"""
Unit tests for role mappings.
"""

import pytest

from app.models.role import (
    ASSIGNABLE_ROLES,
    ROLE_HOME_PATHS,
    ROLE_PERMISSIONS,
    Permission,
    UserRole,
)


@pytest.mark.unit
class TestRoleMappings:
    """Every role resolves to a landing path and a permission set."""

    @pytest.mark.parametrize("role", list(UserRole))
    def test_every_role_mapped(self, role):
        assert role in ROLE_HOME_PATHS
        assert role in ROLE_PERMISSIONS

    def test_home_paths(self):
        assert ROLE_HOME_PATHS[UserRole.SUPER_ADMIN] == "/superadmin/dashboard"
        assert ROLE_HOME_PATHS[UserRole.ADMIN] == "/dashboard"
        assert ROLE_HOME_PATHS[UserRole.MEMBER] == "/dashboard"

    def test_only_admin_manages_users(self):
        holders = {r for r, perms in ROLE_PERMISSIONS.items() if Permission.USERS_MANAGE in perms}
        assert holders == {UserRole.ADMIN}

    def test_super_admin_has_no_tenant_data(self):
        assert Permission.TENANT_DATA not in ROLE_PERMISSIONS[UserRole.SUPER_ADMIN]
        assert Permission.PLATFORM_VIEW in ROLE_PERMISSIONS[UserRole.SUPER_ADMIN]

    def test_super_admin_not_assignable(self):
        assert UserRole.SUPER_ADMIN not in ASSIGNABLE_ROLES
        assert ASSIGNABLE_ROLES == {UserRole.ADMIN, UserRole.MEMBER}
