import logging
import threading
from dataclasses import asdict, dataclass
from typing import Optional

from shared.catalog import FORMATS, REWRITE_TONES, ROLES
from shared.client import ServiceError

logger = logging.getLogger(__name__)

EMPTY_PROMPT_ERROR = "Please enter a prompt to rewrite."
REWRITE_FAILED = "Failed to rewrite prompt. Please try again."


@dataclass(frozen=True)
class RewriteRequest:
    originalPrompt: str
    role: str
    tone: str
    outputFormat: str
    context: Optional[str] = None

    def as_payload(self) -> dict:
        return asdict(self)


class RewriterForm:
    """State behind the rewriter screen"""

    def __init__(self):
        self._lock = threading.Lock()
        self.reset()

    def reset(self):
        self.original_prompt = ""
        self.role = "general"
        self.context = ""
        self.tone = "professional"
        self.output_format = "detailed"
        self.rewritten_prompt = ""
        self.error = ""

    def to_request(self) -> RewriteRequest:
        # The gateway receives display labels, not the select values
        return RewriteRequest(
            originalPrompt=self.original_prompt,
            role=ROLES[self.role].label if self.role in ROLES else "General Purpose",
            context=self.context,
            tone=REWRITE_TONES[self.tone].label if self.tone in REWRITE_TONES else "Professional",
            outputFormat=FORMATS[self.output_format].label if self.output_format in FORMATS else "Detailed",
        )

    def rewrite(self, service) -> bool:
        if not self.original_prompt.strip():
            self.error = EMPTY_PROMPT_ERROR
            return False
        if not self._lock.acquire(blocking=False):
            return False
        self.error = ""
        try:
            result = service.rewrite_prompt(self.to_request())
            self.rewritten_prompt = result.rewritten_prompt
            return True
        except ServiceError as e:
            logger.warning("Error rewriting prompt: %s", e.message)
            self.error = e.message
            return False
        except Exception:
            logger.exception("Error rewriting prompt")
            self.error = REWRITE_FAILED
            return False
        finally:
            self._lock.release()
