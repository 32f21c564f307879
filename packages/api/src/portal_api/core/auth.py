# This project was developed with assistance from AI tools.
"""Pure auth utility functions with no FastAPI or HTTP dependencies.

Used by both the HTTP middleware and the admin WebSocket handshake.
"""

from portal_db.enums import UserRole

from ..schemas.auth import DataScope


def build_data_scope(role: UserRole, user_id: str) -> DataScope:
    """Build data scope rules based on the user's role."""
    if role == UserRole.ADMIN:
        return DataScope(full_pipeline=True)
    if role in (UserRole.BORROWER, UserRole.REFERRAL):
        return DataScope(own_data_only=True, user_id=user_id)
    return DataScope()
