"""HTTP submitter used by the order wizard."""

import asyncio
import json
import logging
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from .errors import SubmissionFailedError

logger = logging.getLogger(__name__)

SUBMIT_PATH = "/api/order/submit/"


class HttpOrderSubmitter:
    """POST an order draft payload to the submission endpoint."""

    def __init__(self, base_url: str, timeout: float = 30) -> None:
        self.url = f"{base_url.rstrip('/')}{SUBMIT_PATH}"
        self.timeout = timeout

    def _post(self, payload: dict) -> dict:
        """Synchronous request (for use in executors)."""
        data = json.dumps(payload).encode()
        req = Request(  # noqa: S310
            self.url,
            data=data,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            method="POST",
        )
        try:
            response = urlopen(req, timeout=self.timeout)  # noqa: S310
            return json.loads(response.read())
        except HTTPError as exc:
            body = exc.read().decode(errors="replace")
            logger.error("Order submission returned HTTP %s: %s", exc.code, body[:200])
            try:
                error = json.loads(body)
            except (json.JSONDecodeError, ValueError):
                error = {}
            raise SubmissionFailedError(
                error.get("message") or error.get("error") or f"Order submission failed with HTTP {exc.code}",
                status=exc.code,
                details=error.get("details"),
            ) from exc
        except URLError as exc:
            raise SubmissionFailedError(f"Could not reach order service: {exc.reason}") from exc

    async def __call__(self, payload: dict) -> dict:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._post, payload)
