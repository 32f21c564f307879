# This project was developed with assistance from AI tools.
__version__ = "0.1.0"

from .database import Base, DatabaseService, get_db, get_db_service
from .enums import (
    ApplicationAction,
    ApplicationStatus,
    DocumentDecision,
    DocumentStatus,
    LeadStatus,
    MeetingStatus,
    MeetingType,
    StepStatus,
    UserRole,
)
from .models import (
    Application,
    Document,
    Meeting,
    ReferralLead,
    UserProfile,
)

__all__ = [
    "Base",
    "DatabaseService",
    "get_db",
    "get_db_service",
    "__version__",
    # Enums
    "ApplicationAction",
    "ApplicationStatus",
    "DocumentDecision",
    "DocumentStatus",
    "LeadStatus",
    "MeetingStatus",
    "MeetingType",
    "StepStatus",
    "UserRole",
    # Models
    "Application",
    "Document",
    "Meeting",
    "ReferralLead",
    "UserProfile",
]
