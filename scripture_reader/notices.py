"""User-facing notices for recoverable failures and informational feedback."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

logger = logging.getLogger(__name__)


class NoticeLevel(Enum):
    INFO = "info"
    ERROR = "error"


@dataclass(frozen=True)
class Notice:
    """A dismissible message for the user. Never fatal."""
    level: NoticeLevel
    title: str
    message: str


Notifier = Callable[[Notice], None]


def log_notice(notice: Notice) -> None:
    """Default notifier: send the notice to the log."""
    if notice.level is NoticeLevel.ERROR:
        logger.warning("%s: %s", notice.title, notice.message)
    else:
        logger.info("%s: %s", notice.title, notice.message)

