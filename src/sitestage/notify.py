"""Default user notification channel."""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class LoggingNotifier:
    """Sends alerts to the log and keeps them for later display."""

    def __init__(self) -> None:
        self.alerts: list[tuple[str, Optional[str]]] = []

    def alert(self, message: str, link: Optional[str] = None) -> None:
        self.alerts.append((message, link))
        if link:
            logger.warning(f"{message} More info: {link}")
        else:
            logger.warning(message)
