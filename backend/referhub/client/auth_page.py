"""
Login / signup page controller.

One form shared by both modes; switching modes keeps whatever was typed and
only changes which fields are submitted.
"""

import logging
from typing import Callable

from referhub.client.http import ApiClient, ApiError
from referhub.client.notify import Notifier
from referhub.client.session import SessionStore

logger = logging.getLogger(__name__)

FORM_FIELDS = ("email", "password", "full_name")


class AuthPage:
    def __init__(
        self,
        api: ApiClient,
        session: SessionStore,
        on_authenticated: Callable[[bool], None],
        notifier: Notifier,
    ):
        self.api = api
        self.session = session
        self.on_authenticated = on_authenticated
        self.notifier = notifier

        self.is_login = True
        self.form = {field: "" for field in FORM_FIELDS}
        self.loading = False

    @property
    def mode(self) -> str:
        return "login" if self.is_login else "signup"

    @property
    def required_fields(self) -> tuple[str, ...]:
        if self.is_login:
            return ("email", "password")
        return FORM_FIELDS

    def toggle_mode(self) -> None:
        """Switch between login and signup without clearing any field."""
        self.is_login = not self.is_login

    def update(self, field: str, value: str) -> None:
        if field not in self.form:
            raise KeyError(f"Unknown auth form field: {field}")
        self.form[field] = value

    def payload(self) -> dict[str, str]:
        if self.is_login:
            return {"email": self.form["email"], "password": self.form["password"]}
        return dict(self.form)

    def submit(self) -> bool:
        """
        Send the form to /auth/login or /auth/signup.

        On success the token and user are saved and the shell is told the
        user is authenticated. On failure nothing is stored.
        """
        missing = [f for f in self.required_fields if not self.form[f].strip()]
        if missing:
            self.notifier.error(f"Please fill in: {', '.join(missing)}")
            return False

        endpoint = "/auth/login" if self.is_login else "/auth/signup"
        self.loading = True
        try:
            data = self.api.post(endpoint, json=self.payload(), auth=False)
        except ApiError as e:
            self.notifier.error(e.message("Authentication failed"))
            return False
        finally:
            self.loading = False

        self.session.save(data["access_token"], data.get("user"))
        self.notifier.success(
            "Login successful!" if self.is_login else "Account created successfully!"
        )
        self.on_authenticated(True)
        return True
