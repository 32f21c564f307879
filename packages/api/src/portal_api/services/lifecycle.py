# This project was developed with assistance from AI tools.
"""Application lifecycle controller.

Owns the status transition table, who may trigger each transition, and the
submission gate. The planner functions are pure; ``transition_application``
is the server-side entry point that loads, plans, commits and reports a
typed outcome instead of raising across its boundary.

Per-document review is a second, independent machine:
``uploaded -> approved | rejected``, both terminal.
"""

import logging
import re
from dataclasses import dataclass
from datetime import UTC, datetime

from portal_db import Application
from portal_db.enums import (
    ApplicationAction,
    ApplicationStatus,
    DocumentDecision,
    DocumentStatus,
    UserRole,
)
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.errors import (
    InvalidTransitionError,
    LifecycleError,
    PreconditionFailedError,
    RecordNotFoundError,
    UnauthorizedTransitionError,
)
from ..schemas.application import ApplicationResponse, TransitionOutcome
from ..schemas.auth import UserContext
from ..schemas.completeness import CompletenessResult
from .application import get_application
from .completeness import check_completeness
from .notifications import get_change_feed

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransitionRule:
    sources: frozenset[ApplicationStatus]
    target: ApplicationStatus
    actors: frozenset[UserRole]
    requires_complete: bool = False


_ADMIN = frozenset({UserRole.ADMIN})
_REVIEWABLE = frozenset({ApplicationStatus.DOCUMENTS_PENDING, ApplicationStatus.UNDER_REVIEW})

TRANSITIONS: dict[ApplicationAction, TransitionRule] = {
    ApplicationAction.SUBMIT: TransitionRule(
        sources=frozenset({ApplicationStatus.STARTED}),
        target=ApplicationStatus.DOCUMENTS_PENDING,
        actors=frozenset({UserRole.BORROWER}),
        requires_complete=True,
    ),
    ApplicationAction.START_REVIEW: TransitionRule(
        sources=frozenset({ApplicationStatus.DOCUMENTS_PENDING}),
        target=ApplicationStatus.UNDER_REVIEW,
        actors=_ADMIN,
    ),
    ApplicationAction.APPROVE: TransitionRule(
        sources=_REVIEWABLE,
        target=ApplicationStatus.APPROVED,
        actors=_ADMIN,
    ),
    ApplicationAction.DECLINE: TransitionRule(
        sources=_REVIEWABLE,
        target=ApplicationStatus.DECLINED,
        actors=_ADMIN,
    ),
    ApplicationAction.FUND: TransitionRule(
        sources=frozenset({ApplicationStatus.APPROVED}),
        target=ApplicationStatus.FUNDED,
        actors=_ADMIN,
    ),
}

_DOCUMENT_DECISIONS: dict[DocumentDecision, DocumentStatus] = {
    DocumentDecision.APPROVE: DocumentStatus.APPROVED,
    DocumentDecision.REJECT: DocumentStatus.REJECTED,
}


# ---------------------------------------------------------------------------
# Pure planning
# ---------------------------------------------------------------------------


def plan_transition(
    current: ApplicationStatus,
    action: ApplicationAction,
    role: UserRole,
    completeness: CompletenessResult | None = None,
) -> ApplicationStatus:
    """Return the status ``action`` leads to from ``current``.

    Checks, in order: the transition exists, the role may trigger it, its
    precondition holds.

    Raises:
        InvalidTransitionError: action not defined from ``current``
            (always the case for terminal statuses).
        UnauthorizedTransitionError: ``role`` may not trigger ``action``.
        PreconditionFailedError: submit while documents are incomplete.
    """
    rule = TRANSITIONS[action]

    if current not in rule.sources:
        if current in ApplicationStatus.terminal_statuses():
            allowed = "none (terminal status)"
        else:
            allowed = sorted(a.value for a in allowed_actions(current))
        raise InvalidTransitionError(
            f"Cannot {action.value} an application in '{current.value}'. "
            f"Available actions: {allowed}."
        )

    if role not in rule.actors:
        raise UnauthorizedTransitionError(
            f"Role '{role.value}' may not {action.value} an application."
        )

    if rule.requires_complete:
        if completeness is None:
            raise PreconditionFailedError("Document completeness was not evaluated.")
        if not completeness.is_complete:
            problems = []
            if completeness.missing_categories:
                problems.append(f"missing categories: {', '.join(completeness.missing_categories)}")
            if completeness.total_documents < completeness.minimum_count:
                problems.append(
                    f"{completeness.total_documents} of "
                    f"{completeness.minimum_count} required documents uploaded"
                )
            raise PreconditionFailedError(
                f"Application is not ready to submit ({'; '.join(problems)})."
            )

    return rule.target


def allowed_actions(
    current: ApplicationStatus,
    role: UserRole | None = None,
) -> list[ApplicationAction]:
    """Actions defined from ``current``, optionally narrowed to those ``role`` may trigger."""
    return [
        action
        for action, rule in TRANSITIONS.items()
        if current in rule.sources and (role is None or role in rule.actors)
    ]


def plan_document_review(
    current: DocumentStatus,
    decision: DocumentDecision,
) -> tuple[DocumentStatus, bool]:
    """Return ``(target_status, changed)`` for a review decision.

    Re-applying the decision a document already holds is a no-op
    (``changed`` is False). Reversing a terminal decision is refused.
    """
    target = _DOCUMENT_DECISIONS[decision]
    if current == target:
        return target, False
    if current in DocumentStatus.terminal_statuses():
        raise InvalidTransitionError(
            f"Document is already '{current.value}' and cannot be moved to '{target.value}'."
        )
    return target, True


def build_folder_name(user: UserContext) -> str:
    """Build the submission folder label ``first_last_email_userid``."""
    # Without name claims the display name falls back to the email
    has_name = user.name and user.name != user.email
    parts = user.name.split() if has_name else []
    first = parts[0] if parts else "user"
    last = parts[-1] if len(parts) > 1 else "unknown"

    def clean(value: str, keep: str = "") -> str:
        return re.sub(rf"[^a-z0-9{keep}]", "", value.lower())

    return "_".join(
        [
            clean(first),
            clean(last),
            clean(user.email or "noemail", keep="@."),
            clean(user.user_id or "noid"),
        ]
    )


def build_application_response(
    app: Application,
    role: UserRole | None = None,
) -> ApplicationResponse:
    """Build ApplicationResponse from the ORM object, with the caller's next actions."""
    return ApplicationResponse(
        id=app.id,
        user_id=app.user_id,
        status=app.status,
        stage=app.stage,
        submitted_at=app.submitted_at,
        notes=app.notes,
        folder_name=app.folder_name,
        document_count=app.document_count,
        created_at=app.created_at,
        updated_at=app.updated_at,
        available_actions=allowed_actions(app.status, role),
    )


# ---------------------------------------------------------------------------
# Server-side entry point
# ---------------------------------------------------------------------------


async def transition_application(
    session: AsyncSession,
    user: UserContext,
    application_id: int,
    action: ApplicationAction,
    *,
    notes: str | None = None,
) -> TransitionOutcome:
    """Apply a lifecycle action to an application.

    All field changes for the transition commit together; if the commit
    fails the session is rolled back and the error propagates. Refused
    transitions come back as ``ok=False`` with a typed ``error``.
    """
    app = await get_application(session, user, application_id)
    if app is None:
        return TransitionOutcome(
            ok=False,
            action=action,
            error=RecordNotFoundError("Application not found").to_detail(),
        )

    previous = app.status
    completeness = None
    if TRANSITIONS[action].requires_complete and previous in TRANSITIONS[action].sources:
        completeness = await check_completeness(session, user, app.user_id)

    try:
        target = plan_transition(previous, action, user.role, completeness)
    except LifecycleError as exc:
        logger.warning(
            "Transition refused: app=%s action=%s status=%s user=%s kind=%s",
            application_id,
            action.value,
            previous.value,
            user.user_id,
            exc.kind.value,
        )
        return TransitionOutcome(
            ok=False,
            action=action,
            previous_status=previous,
            application=build_application_response(app, user.role),
            error=exc.to_detail(),
        )

    now = datetime.now(UTC)
    try:
        app.status = target
        app.updated_at = now
        if action == ApplicationAction.SUBMIT:
            app.submitted_at = now
            app.document_count = completeness.total_documents
            app.folder_name = build_folder_name(user)
            app.submission_data = {
                "email": user.email,
                "name": user.name,
                "document_categories": completeness.uploaded_categories,
                "total_documents": completeness.total_documents,
                "submission_timestamp": now.isoformat(),
            }
        if notes is not None:
            app.notes = notes
        await session.commit()
    except SQLAlchemyError:
        await session.rollback()
        logger.exception("Transition commit failed: app=%s action=%s", application_id, action.value)
        raise

    logger.info(
        "Application %s: %s -> %s (%s by %s)",
        application_id,
        previous.value,
        target.value,
        action.value,
        user.user_id,
    )
    get_change_feed().publish(
        "application.transitioned",
        {
            "application_id": application_id,
            "user_id": app.user_id,
            "action": action.value,
            "from": previous.value,
            "to": target.value,
        },
    )

    return TransitionOutcome(
        ok=True,
        action=action,
        previous_status=previous,
        application=build_application_response(app, user.role),
    )
