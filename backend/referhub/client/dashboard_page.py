"""
Dashboard page controller.

Holds the candidate list, the stats, the search/filter query and the referral
form, and talks to the candidate endpoints. List fetches are tagged with a
request token so a slow response can never overwrite a newer one.
"""

import logging
import os
import threading
from dataclasses import dataclass, fields
from typing import Any, Callable, Optional

from referhub.client.http import ApiClient, ApiError
from referhub.client.notify import Notifier
from referhub.client.session import SessionStore
from referhub.models.candidate import CANDIDATE_STATUSES

logger = logging.getLogger(__name__)

RESUME_ACCEPT = ".pdf"
EMPTY_MESSAGE = "No candidates found."
DELETE_PROMPT = "Are you sure you want to delete this candidate?"

EMPTY_STATS = {"total": 0, "pending": 0, "reviewed": 0, "hired": 0}


def resume_view_url(url: Optional[str]) -> Optional[str]:
    """
    Link target for a stored resume URL.

    Inserts ``f_auto/`` after the first ``/upload/`` segment so the CDN
    serves PDFs with a content type browsers open inline.
    """
    if not url:
        return None
    return url.replace("/upload/", "/upload/f_auto/", 1)


def accepts_resume(path: Optional[str]) -> bool:
    """File-picker hint only; other files are still sent if chosen."""
    return bool(path) and str(path).lower().endswith(RESUME_ACCEPT)


@dataclass
class CandidateQuery:
    search: str = ""
    status_filter: str = ""

    def params(self) -> dict[str, str]:
        """Query string parameters, leaving out empty values."""
        params = {}
        if self.search:
            params["search"] = self.search
        if self.status_filter:
            params["status_filter"] = self.status_filter
        return params


@dataclass
class ReferralForm:
    name: str = ""
    email: str = ""
    phone: str = ""
    job_title: str = ""
    resume: Optional[str] = None  # path to the resume file

    REQUIRED = ("name", "email", "phone", "job_title")

    def missing(self) -> list[str]:
        return [name for name in self.REQUIRED if not getattr(self, name).strip()]

    def form_data(self) -> dict[str, str]:
        return {name: getattr(self, name) for name in self.REQUIRED}

    def multipart_fields(self) -> dict[str, tuple]:
        """Text fields as multipart parts (no filename)."""
        return {name: (None, value) for name, value in self.form_data().items()}

    def reset(self) -> None:
        for f in fields(self):
            setattr(self, f.name, f.default)


class DashboardPage:
    def __init__(
        self,
        api: ApiClient,
        session: SessionStore,
        on_logout: Callable[[], None],
        notifier: Notifier,
        confirm: Optional[Callable[[str], bool]] = None,
    ):
        self.api = api
        self.session = session
        self.on_logout = on_logout
        self.notifier = notifier
        self.confirm = confirm or (lambda prompt: False)

        self.candidates: list[dict[str, Any]] = []
        self.stats: dict[str, int] = dict(EMPTY_STATS)
        self.query = CandidateQuery()
        self.loading = True
        self.dialog_open = False
        self.form = ReferralForm()

        self._request_lock = threading.Lock()
        self._latest_request = 0

    # ---- query state ----

    @property
    def search_term(self) -> str:
        return self.query.search

    @property
    def status_filter(self) -> str:
        return self.query.status_filter

    def set_search(self, term: str) -> None:
        self.set_query(search=term)

    def set_status_filter(self, status: Optional[str]) -> None:
        # "all" is how the filter control spells "no filter"
        self.set_query(status_filter="" if status in (None, "all") else status)

    def set_query(self, search: Optional[str] = None, status_filter: Optional[str] = None) -> None:
        """Update search and/or filter; list and stats are refetched when either changes."""
        new_query = CandidateQuery(
            search=self.query.search if search is None else search,
            status_filter=self.query.status_filter if status_filter is None else status_filter,
        )
        if new_query == self.query:
            return
        self.query = new_query
        self.refresh()

    def mount(self) -> None:
        """Initial load, done once when the dashboard is shown."""
        self.refresh()

    def refresh(self) -> None:
        self.fetch_candidates()
        self.fetch_stats()

    # ---- fetches ----

    def _next_request_token(self) -> int:
        with self._request_lock:
            self._latest_request += 1
            return self._latest_request

    def _is_latest(self, token: int) -> bool:
        with self._request_lock:
            return token == self._latest_request

    def fetch_candidates(self) -> bool:
        token = self._next_request_token()
        params = self.query.params()
        try:
            result = self.api.get("/candidates", params=params)
        except ApiError as e:
            if not self._is_latest(token):
                return False
            # The previous list stays on screen
            logger.debug("Candidate fetch failed: %s", e)
            self.notifier.error("Failed to fetch candidates")
            return False
        finally:
            if self._is_latest(token):
                self.loading = False

        if not self._is_latest(token):
            logger.debug("Discarding stale candidate list (request %s)", token)
            return False
        self.candidates = list(result or [])
        return True

    def fetch_stats(self) -> bool:
        try:
            result = self.api.get("/candidates/stats")
        except ApiError as e:
            logger.error("Failed to fetch stats: %s", e)
            return False
        self.stats = {key: int(result.get(key, 0)) for key in EMPTY_STATS}
        return True

    @property
    def empty_message(self) -> Optional[str]:
        if self.loading or self.candidates:
            return None
        return EMPTY_MESSAGE

    # ---- referral dialog ----

    def open_dialog(self) -> None:
        self.dialog_open = True

    def close_dialog(self) -> None:
        self.dialog_open = False

    def submit_referral(self) -> bool:
        """
        POST the referral form as multipart data.

        The resume part is only included when a file was chosen.
        """
        missing = self.form.missing()
        if missing:
            self.notifier.error(f"Please fill in: {', '.join(missing)}")
            return False

        resume_path = self.form.resume
        if resume_path and not accepts_resume(resume_path):
            logger.warning("Resume %s is not a %s file", resume_path, RESUME_ACCEPT)

        files = self.form.multipart_fields()
        try:
            if resume_path:
                with open(resume_path, "rb") as fh:
                    files["resume"] = (os.path.basename(resume_path), fh, "application/pdf")
                    self.api.post("/candidates", files=files)
            else:
                self.api.post("/candidates", files=files)
        except OSError as e:
            self.notifier.error(f"Could not read resume file: {e}")
            return False
        except ApiError as e:
            self.notifier.error(e.message("Failed to refer candidate"))
            return False

        self.notifier.success("Candidate referred successfully!")
        self.dialog_open = False
        self.form.reset()
        self.refresh()
        return True

    # ---- per-candidate actions ----

    def update_status(self, candidate_id: str, status: str) -> bool:
        if status not in CANDIDATE_STATUSES:
            raise ValueError(f"Status must be one of {CANDIDATE_STATUSES}, got {status!r}")

        try:
            self.api.put(f"/candidates/{candidate_id}/status", json={"status": status})
        except ApiError:
            self.notifier.error("Failed to update status")
            return False

        self.notifier.success(f"Status updated to {status}")
        self.refresh()
        return True

    def delete_candidate(self, candidate_id: str) -> bool:
        """Delete after the user confirms; declining sends nothing."""
        if not self.confirm(DELETE_PROMPT):
            return False

        try:
            self.api.delete(f"/candidates/{candidate_id}")
        except ApiError:
            self.notifier.error("Failed to delete candidate")
            return False

        self.notifier.success("Candidate deleted successfully")
        self.refresh()
        return True

    def logout(self) -> None:
        self.session.clear()
        self.notifier.success("Logged out successfully")
        self.on_logout()
