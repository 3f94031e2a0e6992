from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from shared.catalog import AI_MODELS
from shared.errors import InvalidInput


class GenerateRequest(BaseModel):
    goal: str = Field(min_length=1, max_length=1000)
    context: Optional[str] = Field(None, max_length=2000)
    audience: str = Field(min_length=1, max_length=500)
    outputType: str = Field(min_length=1, max_length=100)
    aiModel: str = Field(min_length=1, max_length=100)
    tone: str = Field(min_length=1, max_length=100)
    length: str = Field(min_length=1, max_length=100)


class RewriteRequest(BaseModel):
    originalPrompt: str = Field(min_length=1, max_length=5000)
    role: str = Field(min_length=1, max_length=200)
    context: Optional[str] = Field(None, max_length=2000)
    tone: str = Field(min_length=1, max_length=100)
    outputFormat: str = Field(min_length=1, max_length=100)


def limit_message(model, name: str) -> str:
    """Human readable rule for one field, e.g. 'goal must be 1-1000 characters'"""
    info = model.model_fields[name]
    max_length = next(m.max_length for m in info.metadata if getattr(m, "max_length", None))
    if info.is_required():
        return f"{name} must be 1-{max_length} characters"
    return f"{name} must be max {max_length} characters"


def validate_payload(model, data, enforce_catalog=False):
    """Validate a decoded JSON body against a request model.

    Every violation is collected before raising, one entry per field in
    declaration order. Raises InvalidInput when anything is wrong.
    """
    if not isinstance(data, dict):
        data = {}

    failed = set()
    parsed = None
    try:
        parsed = model.model_validate(data)
    except ValidationError as e:
        failed = {err["loc"][0] for err in e.errors() if err["loc"]}

    details = [limit_message(model, name) for name in model.model_fields if name in failed]

    # Catalog check only runs on a shape-valid model id
    if enforce_catalog and "aiModel" in model.model_fields and "aiModel" not in failed:
        if data.get("aiModel") not in AI_MODELS:
            details.append(f"aiModel must be one of: {', '.join(AI_MODELS)}")

    if details:
        raise InvalidInput(details)
    return parsed


def wants_stream(data) -> bool:
    return isinstance(data, dict) and data.get("stream") is True
