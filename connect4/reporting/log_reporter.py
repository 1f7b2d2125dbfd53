"""Reporter that only logs results."""

import json
import logging
from typing import Any

from .interface import ResultReporter


logger = logging.getLogger(__name__)


class LogReporter(ResultReporter):
    """Logs each payload at INFO and keeps them for inspection."""

    def __init__(self) -> None:
        self.reported: list[dict[str, Any]] = []

    def report(self, payload: dict[str, Any]) -> None:
        self.reported.append(payload)
        logger.info("Game %s finished: %s", payload.get("gameId"), json.dumps(payload))

    def get_name(self) -> str:
        return "Log reporter"
