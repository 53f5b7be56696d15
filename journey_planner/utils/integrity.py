"""Helpers for recognising unique constraint violations."""

from sqlalchemy import UniqueConstraint
from sqlalchemy.exc import IntegrityError


def is_unique_violation(exc: IntegrityError, constraint: UniqueConstraint) -> bool:
    """Check whether an IntegrityError was raised by the given unique constraint.

    PostgreSQL reports the constraint name ('... violates unique constraint
    "uq_name"'), SQLite reports the columns ('UNIQUE constraint failed:
    table.column').
    """
    error_str = str(exc.orig if exc.orig is not None else exc).lower()
    if constraint.name and f'"{constraint.name}"' in error_str:
        return True

    table = constraint.table
    if table is None or "unique constraint failed" not in error_str:
        return False
    columns = ", ".join(f"{table.name}.{column.name}" for column in constraint.columns)
    return columns.lower() in error_str
