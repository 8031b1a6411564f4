"""User roles and the role hierarchy used by every authorization decision."""

import enum


class Role(str, enum.Enum):
    """Closed set of staff roles."""

    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


# role held -> roles it satisfies. super_admin is a superset of admin.
ROLE_GRANTS: dict[Role, frozenset[Role]] = {
    Role.SUPER_ADMIN: frozenset({Role.SUPER_ADMIN, Role.ADMIN}),
    Role.ADMIN: frozenset({Role.ADMIN}),
}


def parse_role(value: "str | Role | None") -> Role | None:
    """Return the Role for value, or None if it is not a known role."""
    if value is None:
        return None
    try:
        return Role(value)
    except ValueError:
        return None


def role_satisfies(actual: "str | Role | None", required: "str | Role") -> bool:
    """
    True if a user holding `actual` may access something gated on `required`.

    Known roles go through ROLE_GRANTS; anything else only matches itself exactly.
    """
    if actual is None:
        return False
    actual_role = parse_role(actual)
    required_role = parse_role(required)
    if actual_role is None or required_role is None:
        return str(getattr(actual, "value", actual)) == str(getattr(required, "value", required))
    return required_role in ROLE_GRANTS.get(actual_role, frozenset({actual_role}))
