"""Five step prompt wizard.

The controller owns one WizardState and only changes it through ``update``,
``next``, ``prev``, ``generate`` and ``reset``. Step 5 has two sub-states:
reviewing (no result yet) and generated (``result`` holds the prompt text).
"""
import logging
import threading
from dataclasses import asdict, dataclass, fields, replace
from enum import IntEnum
from typing import Optional

from shared.catalog import AI_MODELS, DEFAULT_MODEL, LENGTHS, OUTPUT_TYPES, STEPS, TONES, lookup
from shared.client import ServiceError

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR = "An unexpected error occurred. Please try again."
PREFILL_NOTICE = "The wizard has been pre-filled with template data. You can modify it as needed."


class WizardStep(IntEnum):
    GOAL = 1
    CONTEXT = 2
    AUDIENCE = 3
    OUTPUT_MODEL = 4
    REVIEW = 5


class WizardError(Exception):
    pass


@dataclass
class WizardState:
    goal: str = ""
    context: str = ""
    audience: str = ""
    outputType: str = ""
    model: str = DEFAULT_MODEL
    tone: str = "professional"
    length: str = "medium"
    additionalRequirements: str = ""

    @classmethod
    def field_names(cls):
        return [f.name for f in fields(cls)]

    def merged(self, partial) -> "WizardState":
        """Copy with known, non-None keys of ``partial`` laid over this state"""
        known = set(self.field_names())
        values = {k: str(v) for k, v in (partial or {}).items() if k in known and v is not None}
        return replace(self, **values)

    def summary(self) -> dict:
        """Labels shown on the review step"""
        return {
            "goal": self.goal or "Not specified",
            "context": self.context,
            "audience": self.audience or "Not specified",
            "outputType": lookup(OUTPUT_TYPES, self.outputType).label,
            "model": lookup(AI_MODELS, self.model).label,
            "tone": lookup(TONES, self.tone, "Default").label,
            "length": lookup(LENGTHS, self.length, "Variable").label,
            "additionalRequirements": self.additionalRequirements,
        }


@dataclass(frozen=True)
class GenerationRequest:
    goal: str
    audience: str
    outputType: str
    aiModel: str
    tone: str
    length: str
    context: Optional[str] = None
    stream: Optional[bool] = None

    @classmethod
    def from_state(cls, state: WizardState, stream=None):
        return cls(
            goal=state.goal,
            context=state.context,
            audience=state.audience,
            outputType=state.outputType,
            aiModel=state.model,
            tone=state.tone,
            length=state.length,
            stream=stream,
        )

    def as_payload(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}


def is_step_valid(state: WizardState, step) -> bool:
    if step == WizardStep.GOAL:
        return len(state.goal.strip()) > 0
    if step == WizardStep.CONTEXT:
        return True
    if step == WizardStep.AUDIENCE:
        return len(state.audience.strip()) > 0
    if step == WizardStep.OUTPUT_MODEL:
        return len(state.outputType.strip()) > 0
    if step == WizardStep.REVIEW:
        return True
    return False


class WizardController:
    def __init__(self, prefill=None):
        self.step = WizardStep.GOAL
        self.state = WizardState().merged(prefill)
        self.result = ""
        self.error = ""
        self.notice = ""
        self._lock = threading.Lock()
        self._generating = False
        if prefill and any(prefill.get(k) for k in ("goal", "context", "outputType")):
            self.notice = PREFILL_NOTICE

    # ---------- read side ----------
    @property
    def generating(self) -> bool:
        return self._generating

    @property
    def generated(self) -> bool:
        return self.step == WizardStep.REVIEW and bool(self.result)

    @property
    def progress(self) -> int:
        return round(self.step / len(STEPS) * 100)

    @property
    def current(self):
        return STEPS[self.step - 1]

    def is_step_valid(self, step=None) -> bool:
        return is_step_valid(self.state, self.step if step is None else step)

    def pop_notice(self) -> str:
        """The pre-fill notice is shown once"""
        notice, self.notice = self.notice, ""
        return notice

    # ---------- transitions ----------
    def update(self, field: str, value: str):
        if field not in WizardState.field_names():
            raise WizardError(f"unknown wizard field: {field}")
        setattr(self.state, field, value)

    def next(self) -> bool:
        if self.step == WizardStep.REVIEW or not self.is_step_valid():
            return False
        self.step = WizardStep(self.step + 1)
        return True

    def prev(self) -> bool:
        if self.step == WizardStep.GOAL:
            return False
        self.step = WizardStep(self.step - 1)
        return True

    def generate(self, service) -> bool:
        """Ask the gateway for a prompt; returns False if nothing was started.

        ``service`` is anything with ``generate_prompt(GenerationRequest) -> str``.
        Failures stay on the review step with ``error`` set.
        """
        if self.step != WizardStep.REVIEW or self.generated:
            raise WizardError("generate is only available while reviewing")
        if not self._lock.acquire(blocking=False):
            logger.debug("Generation already in flight, ignoring")
            return False
        self._generating = True
        self.error = ""
        try:
            text = service.generate_prompt(GenerationRequest.from_state(self.state))
            if text:
                self.result = text
            return True
        except ServiceError as e:
            logger.warning("Error generating prompt: %s", e.message)
            self.error = e.message or UNEXPECTED_ERROR
            return True
        except Exception:
            logger.exception("Unexpected error generating prompt")
            self.error = UNEXPECTED_ERROR
            return True
        finally:
            self._generating = False
            self._lock.release()

    def reset(self):
        self.step = WizardStep.GOAL
        self.state = WizardState()
        self.result = ""
        self.error = ""
        self.notice = ""
