# This project was developed with assistance from AI tools.
"""
SBA loan portal -- domain models

Borrower profiles, loan applications, uploaded documents, meeting requests
and referral-partner leads. Every row is keyed by the owning user's
auth-provider subject (``user_id``).
"""

from sqlalchemy import (
    JSON,
    CheckConstraint,
    Column,
    DateTime,
    Enum,
    Integer,
    String,
    Text,
    func,
)

from .database import Base
from .enums import (
    ApplicationStatus,
    DocumentStatus,
    LeadStatus,
    MeetingStatus,
    MeetingType,
    UserRole,
)


def _enum(enum_cls, name: str) -> Enum:
    """Non-native enum column that stores member values (e.g. 'started')."""
    return Enum(enum_cls, name=name, native_enum=False, values_callable=lambda e: [m.value for m in e])


class UserProfile(Base):
    """Portal profile linked to the auth provider identity."""

    __tablename__ = "user_profiles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(255), unique=True, nullable=False, index=True)
    role = Column(
        _enum(UserRole, "user_role"),
        nullable=False,
        default=UserRole.BORROWER,
    )
    first_name = Column(String(100), nullable=False, default="")
    last_name = Column(String(100), nullable=False, default="")
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(50), nullable=True)
    company = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<UserProfile(user_id='{self.user_id}', role='{self.role}')>"


class Application(Base):
    """SBA loan application. ``submitted_at`` is set exactly when status leaves ``started``."""

    __tablename__ = "applications"
    __table_args__ = (
        CheckConstraint(
            "(status = 'started') = (submitted_at IS NULL)",
            name="ck_applications_submitted_at_matches_status",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(255), nullable=False, index=True)
    status = Column(
        _enum(ApplicationStatus, "application_status"),
        nullable=False,
        default=ApplicationStatus.STARTED,
    )
    stage = Column(String(100), nullable=True)
    submitted_at = Column(DateTime(timezone=True), nullable=True, index=True)
    notes = Column(Text, nullable=True)
    folder_name = Column(String(500), nullable=True)
    document_count = Column(Integer, nullable=True)
    submission_data = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<Application(id={self.id}, status='{self.status}')>"


class Document(Base):
    """One uploaded file in a checklist category."""

    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(255), nullable=False, index=True)
    doc_name = Column(String(255), nullable=False)
    file_name = Column(String(500), nullable=False)
    file_path = Column(String(1000), nullable=False)
    content_type = Column(String(255), nullable=True)
    status = Column(
        _enum(DocumentStatus, "document_status"),
        nullable=False,
        default=DocumentStatus.UPLOADED,
    )
    reviewed_by = Column(String(255), nullable=True)
    reviewed_at = Column(DateTime(timezone=True), nullable=True)
    uploaded_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<Document(id={self.id}, doc_name='{self.doc_name}')>"


class Meeting(Base):
    """Callback or in-person meeting requested by a borrower."""

    __tablename__ = "meetings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(255), nullable=False, index=True)
    meeting_date = Column(String(20), nullable=False)
    meeting_time = Column(String(50), nullable=False)
    meeting_type = Column(
        _enum(MeetingType, "meeting_type"),
        nullable=False,
    )
    purpose = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    contact_info = Column(String(255), nullable=True)
    status = Column(
        _enum(MeetingStatus, "meeting_status"),
        nullable=False,
        default=MeetingStatus.SCHEDULED,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<Meeting(id={self.id}, type='{self.meeting_type}', status='{self.status}')>"


class ReferralLead(Base):
    """Business lead submitted by a referral partner."""

    __tablename__ = "referral_leads"

    id = Column(Integer, primary_key=True, autoincrement=True)
    referral_user_id = Column(String(255), nullable=False, index=True)
    business_name = Column(String(255), nullable=False)
    contact_name = Column(String(255), nullable=False)
    contact_email = Column(String(255), nullable=False)
    contact_phone = Column(String(50), nullable=True)
    loan_amount = Column(String(100), nullable=True)
    business_type = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    status = Column(
        _enum(LeadStatus, "lead_status"),
        nullable=False,
        default=LeadStatus.NEW,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<ReferralLead(id={self.id}, business='{self.business_name}', status='{self.status}')>"
