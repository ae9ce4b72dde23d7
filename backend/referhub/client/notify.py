"""Toast-style user notifications."""

import logging
from typing import Optional

logger = logging.getLogger(__name__)

SUCCESS = "success"
ERROR = "error"


class Notifier:
    """Collects notifications shown to the user and logs each one."""

    def __init__(self, echo=None):
        self.messages: list[tuple[str, str]] = []
        self.echo = echo

    def success(self, message: str) -> None:
        logger.info(message)
        self._push(SUCCESS, message)

    def error(self, message: str) -> None:
        logger.warning(message)
        self._push(ERROR, message)

    def _push(self, level: str, message: str) -> None:
        self.messages.append((level, message))
        if self.echo is not None:
            self.echo(level, message)

    @property
    def last(self) -> Optional[tuple[str, str]]:
        return self.messages[-1] if self.messages else None
