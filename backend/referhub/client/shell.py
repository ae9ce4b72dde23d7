"""Application shell: owns the authenticated flag and the two pages."""

import logging

from referhub.client.auth_page import AuthPage
from referhub.client.dashboard_page import DashboardPage
from referhub.client.http import ApiClient
from referhub.client.notify import Notifier

logger = logging.getLogger(__name__)


class ReferHubApp:
    def __init__(self, session, api=None, notifier=None, confirm=None):
        self.session = session
        self.api = api if api is not None else ApiClient(session)
        self.notifier = notifier if notifier is not None else Notifier()

        self.is_authenticated = session.is_authenticated

        self.auth_page = AuthPage(
            self.api, session, self.set_authenticated, self.notifier
        )
        self.dashboard = DashboardPage(
            self.api,
            session,
            on_logout=lambda: self.set_authenticated(False),
            notifier=self.notifier,
            confirm=confirm,
        )

    def set_authenticated(self, value: bool) -> None:
        logger.debug("Authenticated: %s", value)
        self.is_authenticated = value

    @property
    def current_page(self):
        return self.dashboard if self.is_authenticated else self.auth_page
