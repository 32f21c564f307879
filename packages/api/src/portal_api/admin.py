# This project was developed with assistance from AI tools.
"""
SQLAdmin configuration for database administration UI

Access the admin panel at: http://localhost:8000/admin

When AUTH_DISABLED=false, requires admin credentials via login form.
When AUTH_DISABLED=true, admin panel is open (dev mode).

Application and document status are not editable here; they move only
through the lifecycle endpoints.
"""

from portal_db import Application, Document, Meeting, ReferralLead, UserProfile
from sqladmin import Admin, ModelView
from sqladmin.authentication import AuthenticationBackend
from sqlalchemy import create_engine
from starlette.requests import Request
from starlette.responses import Response

from .core.config import settings

# SQLAdmin requires a sync engine; derive from the async DATABASE_URL
_sync_url = settings.DATABASE_URL.replace("+asyncpg", "")
engine = create_engine(_sync_url, echo=False)


class AdminAuth(AuthenticationBackend):
    """Session-based auth gate for SQLAdmin.

    When AUTH_DISABLED=true, authenticate() always returns True (dev mode).
    Otherwise, requires login with SQLADMIN_USER / SQLADMIN_PASSWORD.
    """

    async def login(self, request: Request) -> bool:
        form = await request.form()
        username = form.get("username")
        password = form.get("password")
        if username == settings.SQLADMIN_USER and password == settings.SQLADMIN_PASSWORD:
            request.session.update({"admin_authenticated": True})
            return True
        return False

    async def logout(self, request: Request) -> bool:
        request.session.clear()
        return True

    async def authenticate(self, request: Request) -> Response | bool:
        if settings.AUTH_DISABLED:
            return True
        return request.session.get("admin_authenticated", False)


class UserProfileAdmin(ModelView, model=UserProfile):
    column_list = [
        UserProfile.id,
        UserProfile.user_id,
        UserProfile.role,
        UserProfile.first_name,
        UserProfile.last_name,
        UserProfile.email,
        UserProfile.created_at,
    ]
    column_searchable_list = [UserProfile.first_name, UserProfile.last_name, UserProfile.email]
    column_sortable_list = [UserProfile.id, UserProfile.last_name, UserProfile.created_at]
    column_default_sort = [(UserProfile.created_at, True)]
    name = "Profile"
    name_plural = "Profiles"
    icon = "fa-solid fa-user"


class ApplicationAdmin(ModelView, model=Application):
    column_list = [
        Application.id,
        Application.user_id,
        Application.status,
        Application.stage,
        Application.document_count,
        Application.submitted_at,
    ]
    column_searchable_list = [Application.user_id, Application.folder_name]
    column_sortable_list = [Application.id, Application.status, Application.submitted_at]
    column_default_sort = [(Application.created_at, True)]
    form_excluded_columns = [Application.status, Application.submitted_at, Application.submission_data]
    can_create = False
    name = "Application"
    name_plural = "Applications"
    icon = "fa-solid fa-file-alt"


class DocumentAdmin(ModelView, model=Document):
    column_list = [
        Document.id,
        Document.user_id,
        Document.doc_name,
        Document.file_name,
        Document.status,
        Document.uploaded_at,
    ]
    column_searchable_list = [Document.user_id, Document.doc_name]
    column_sortable_list = [Document.id, Document.doc_name, Document.status]
    column_default_sort = [(Document.uploaded_at, True)]
    can_create = False
    can_edit = False
    can_delete = False
    name = "Document"
    name_plural = "Documents"
    icon = "fa-solid fa-file-upload"


class MeetingAdmin(ModelView, model=Meeting):
    column_list = [
        Meeting.id,
        Meeting.user_id,
        Meeting.meeting_type,
        Meeting.meeting_date,
        Meeting.meeting_time,
        Meeting.status,
    ]
    column_sortable_list = [Meeting.id, Meeting.meeting_date, Meeting.status]
    column_default_sort = [(Meeting.created_at, True)]
    name = "Meeting"
    name_plural = "Meetings"
    icon = "fa-solid fa-calendar"


class ReferralLeadAdmin(ModelView, model=ReferralLead):
    column_list = [
        ReferralLead.id,
        ReferralLead.business_name,
        ReferralLead.contact_name,
        ReferralLead.contact_email,
        ReferralLead.status,
        ReferralLead.created_at,
    ]
    column_searchable_list = [ReferralLead.business_name, ReferralLead.contact_email]
    column_sortable_list = [ReferralLead.id, ReferralLead.status, ReferralLead.created_at]
    column_default_sort = [(ReferralLead.created_at, True)]
    name = "Referral Lead"
    name_plural = "Referral Leads"
    icon = "fa-solid fa-handshake"


def setup_admin(app):
    """Set up SQLAdmin and mount it to the FastAPI app."""
    auth_backend = AdminAuth(
        secret_key=settings.SQLADMIN_SECRET_KEY,
    )
    admin = Admin(app, engine, title="SBA Portal Admin", authentication_backend=auth_backend)

    admin.add_view(UserProfileAdmin)
    admin.add_view(ApplicationAdmin)
    admin.add_view(DocumentAdmin)
    admin.add_view(MeetingAdmin)
    admin.add_view(ReferralLeadAdmin)

    return admin
