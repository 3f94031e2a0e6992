import logging
from dataclasses import dataclass

import requests

from shared.auth import bearer

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """The gateway answered with an error; ``message`` is safe to show users."""

    def __init__(self, message: str, status: int = 500, details=None):
        self.message = message
        self.status = status
        self.details = details or []
        super().__init__(message)


@dataclass
class RewriteResult:
    rewritten_prompt: str
    original_length: int
    rewritten_length: int
    model: str


class PromptServiceClient:
    """Calls the prompt gateway on behalf of one browser session"""

    def __init__(self, base_url: str, credential: str, timeout: float = 60):
        self.base_url = base_url.rstrip("/")
        self.credential = credential
        self.timeout = timeout

    def _post(self, path, body) -> dict:
        response = requests.post(
            f"{self.base_url}{path}",
            headers={**bearer(self.credential), "Content-Type": "application/json"},
            json=body,
            timeout=self.timeout,
        )
        try:
            data = response.json()
        except ValueError:
            data = {}
        if response.status_code != 200:
            logger.warning("Gateway %s returned %s", path, response.status_code)
            raise ServiceError(
                data.get("error") or "Failed to process request. Please try again.",
                response.status_code,
                data.get("details"),
            )
        return data

    def generate_prompt(self, request) -> str:
        data = self._post("/generate-prompt", request.as_payload())
        return data.get("prompt", "")

    def rewrite_prompt(self, request) -> RewriteResult:
        data = self._post("/rewrite-prompt", request.as_payload())
        metadata = data.get("metadata", {})
        return RewriteResult(
            rewritten_prompt=data["rewrittenPrompt"],
            original_length=metadata.get("originalLength", 0),
            rewritten_length=metadata.get("rewrittenLength", 0),
            model=metadata.get("model", ""),
        )
