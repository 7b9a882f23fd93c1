"""Seed default permission catalog and roles.

Revision ID: 002
Revises: 001
Create Date: 2026-10-17

"""

from collections.abc import Sequence

from alembic import op

revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

RESOURCES = ("user", "role", "permission", "file")
ACTIONS = ("create", "read", "update", "delete", "manage")
USER_ROLE_PERMISSIONS = ("users.read", "files.create", "files.read")


def upgrade() -> None:
    values = ",\n".join(
        f"(gen_random_uuid(), '{resource}s.{action}', '{resource}', '{action}', "
        f"'{action.capitalize()} {resource}s')"
        for resource in RESOURCES
        for action in ACTIONS
    )
    op.execute(f"""
        INSERT INTO permission (id, name, resource, action, description) VALUES
        {values}
    """)
    op.execute("""
        INSERT INTO role (id, name, description) VALUES
        (gen_random_uuid(), 'superadmin', 'Unrestricted access'),
        (gen_random_uuid(), 'admin', 'Manages users, roles and permissions'),
        (gen_random_uuid(), 'user', 'Regular member')
    """)
    op.execute("""
        INSERT INTO role_permission (role_id, permission_id)
        SELECT r.id, p.id FROM role r CROSS JOIN permission p
        WHERE r.name = 'admin'
    """)
    names = ", ".join(f"'{name}'" for name in USER_ROLE_PERMISSIONS)
    op.execute(f"""
        INSERT INTO role_permission (role_id, permission_id)
        SELECT r.id, p.id FROM role r JOIN permission p ON p.name IN ({names})
        WHERE r.name = 'user'
    """)


def downgrade() -> None:
    op.execute("DELETE FROM role WHERE name IN ('superadmin', 'admin', 'user')")
    op.execute(f"DELETE FROM permission WHERE resource IN ({', '.join(repr(r) for r in RESOURCES)})")
