# This project was developed with assistance from AI tools.
"""Tests for the progress projection."""

from datetime import UTC, datetime

import pytest
from portal_db.enums import ApplicationStatus, StepStatus

from portal_api.services.progress import project_progress

from .factories import make_mock_application

SUBMITTED = datetime(2026, 3, 1, tzinfo=UTC)


def _statuses(progress) -> dict[str, StepStatus]:
    return {step.id: step.status for step in progress.steps}


def test_fresh_draft_is_all_pending():
    progress = project_progress(make_mock_application(), 0, 5)

    assert set(_statuses(progress).values()) == {StepStatus.PENDING}
    assert progress.current_step == "application"
    assert progress.completion_percentage == 0


def test_first_upload_completes_forms_and_starts_documents():
    statuses = _statuses(project_progress(make_mock_application(), 2, 5))

    assert statuses["application"] == StepStatus.COMPLETED
    assert statuses["documents"] == StepStatus.IN_PROGRESS


def test_minimum_documents_completes_documents_step():
    progress = project_progress(make_mock_application(), 5, 5)

    assert _statuses(progress)["documents"] == StepStatus.COMPLETED
    assert progress.current_step == "review"


def test_under_review_marks_review_in_progress():
    app = make_mock_application(status=ApplicationStatus.UNDER_REVIEW, submitted_at=SUBMITTED)
    statuses = _statuses(project_progress(app, 6, 5))

    assert statuses["review"] == StepStatus.IN_PROGRESS
    assert statuses["approval"] == StepStatus.PENDING


def test_underwriting_stage_label():
    app = make_mock_application(
        status=ApplicationStatus.UNDER_REVIEW, submitted_at=SUBMITTED, stage="Underwriting"
    )
    assert _statuses(project_progress(app, 6, 5))["underwriting"] == StepStatus.IN_PROGRESS


def test_approved_completes_through_approval():
    app = make_mock_application(status=ApplicationStatus.APPROVED, submitted_at=SUBMITTED)
    progress = project_progress(app, 6, 5)
    statuses = _statuses(progress)

    assert statuses["review"] == StepStatus.COMPLETED
    assert statuses["underwriting"] == StepStatus.COMPLETED
    assert statuses["approval"] == StepStatus.COMPLETED
    assert statuses["funding"] == StepStatus.PENDING
    assert progress.current_step == "funding"
    assert progress.completion_percentage == 83


def test_funded_is_fully_complete():
    app = make_mock_application(status=ApplicationStatus.FUNDED, submitted_at=SUBMITTED)
    progress = project_progress(app, 6, 5)

    assert progress.current_step is None
    assert progress.completion_percentage == 100


@pytest.mark.parametrize("status", [ApplicationStatus.DECLINED, ApplicationStatus.DOCUMENTS_PENDING])
def test_undecided_or_declined_leaves_approval_pending(status):
    app = make_mock_application(status=status, submitted_at=SUBMITTED)
    assert _statuses(project_progress(app, 6, 5))["approval"] == StepStatus.PENDING
