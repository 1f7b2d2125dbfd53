"""HTTP result reporter.

POSTs each finished game as JSON to ``{base_url}/games``.
"""

import json
import logging
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from ..core.errors import ReportError
from .interface import ResultReporter


logger = logging.getLogger(__name__)


class HTTPReporter(ResultReporter):
    """Send results to a games API.

    Usage:
        reporter = HTTPReporter("http://localhost:8000")
        reporter.report({"gameId": 1, "moves": [...]})
    """

    def __init__(self, base_url: str = "http://localhost:8000", timeout: float = 2.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.last_error: str = ""

    @property
    def games_url(self) -> str:
        """URL results are posted to."""
        return f"{self.base_url}/games"

    def report(self, payload: dict[str, Any]) -> None:
        """POST the payload.

        Blocking; each socket operation waits at most ``timeout`` seconds.

        Raises:
            ReportError: On connection failure or a non-2xx response
        """
        body = json.dumps(payload).encode("utf-8")
        req = Request(
            self.games_url,
            data=body,
            headers={"Content-Type": "application/json"},
            method="POST",
        )
        try:
            with urlopen(req, timeout=self.timeout) as resp:
                status = resp.status
        except HTTPError as e:
            self.last_error = f"HTTP {e.code}"
            raise ReportError(f"POST {self.games_url} failed: HTTP {e.code}") from e
        except (URLError, OSError) as e:
            self.last_error = str(e)
            raise ReportError(f"POST {self.games_url} failed: {e}") from e

        if not 200 <= status < 300:
            self.last_error = f"HTTP {status}"
            raise ReportError(f"POST {self.games_url} failed: HTTP {status}")

        self.last_error = ""
        logger.info("Reported game %s to %s", payload.get("gameId"), self.games_url)

    def get_name(self) -> str:
        return f"HTTP reporter ({self.games_url})"
