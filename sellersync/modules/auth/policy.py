"""
Access policy: anyone authenticated may read, only managers and admins may
create, update or delete ledger records.
"""

WRITE_ROLES = frozenset({"admin", "manager"})


def can_write(role) -> bool:
    """True when ``role`` may mutate sellers, stock, sales, payments, pending amounts or exhibitions."""
    value = getattr(role, "value", role)
    return value in WRITE_ROLES
