from referhub.client.session import SessionStore, FileStorage, MemoryStorage
from referhub.client.http import ApiClient, ApiError
from referhub.client.notify import Notifier
from referhub.client.auth_page import AuthPage
from referhub.client.dashboard_page import (
    DashboardPage,
    CandidateQuery,
    ReferralForm,
    resume_view_url,
)
from referhub.client.shell import ReferHubApp

__all__ = [
    "SessionStore",
    "FileStorage",
    "MemoryStorage",
    "ApiClient",
    "ApiError",
    "Notifier",
    "AuthPage",
    "DashboardPage",
    "CandidateQuery",
    "ReferralForm",
    "resume_view_url",
    "ReferHubApp",
]
