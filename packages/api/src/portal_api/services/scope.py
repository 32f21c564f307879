# This project was developed with assistance from AI tools.
"""Shared data scope filtering for service queries.

Centralizes the DataScope -> SQL WHERE logic so that each resource service
applies the same rules. Every portal table carries its owner's auth subject,
so the caller names the owner column to filter on.
"""

from sqlalchemy import false

from ..schemas.auth import DataScope, UserContext


def apply_data_scope(stmt, scope: DataScope, user: UserContext, *, owner_column):
    """Apply data scope filtering to a SQLAlchemy query.

    Args:
        stmt: A SQLAlchemy select statement.
        scope: The caller's DataScope.
        user: The caller's UserContext.
        owner_column: Column holding the owning user's id
            (e.g. ``Document.user_id``, ``ReferralLead.referral_user_id``).

    Returns:
        The filtered statement. Scopes that are neither own-data nor full
        pipeline see nothing.
    """
    if scope.full_pipeline:
        return stmt
    if scope.own_data_only and scope.user_id:
        return stmt.where(owner_column == scope.user_id)
    return stmt.where(false())
