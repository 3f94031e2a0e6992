from __future__ import annotations

from shared.client import RewriteResult, ServiceError
from shared.rewriter import EMPTY_PROMPT_ERROR, REWRITE_FAILED, RewriteRequest, RewriterForm


class FakeRewriteService:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.requests: list[RewriteRequest] = []

    def rewrite_prompt(self, request: RewriteRequest) -> RewriteResult:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        text = f"Improved: {request.originalPrompt}"
        return RewriteResult(text, len(request.originalPrompt), len(text), "google/gemini-2.5-flash")


def test_empty_prompt_is_rejected_locally() -> None:
    form = RewriterForm()
    form.original_prompt = "   "
    service = FakeRewriteService()

    assert form.rewrite(service) is False
    assert form.error == EMPTY_PROMPT_ERROR
    assert service.requests == []


def test_request_uses_catalog_labels() -> None:
    form = RewriterForm()
    form.original_prompt = "write code"
    form.role = "developer"
    form.tone = "technical"
    form.output_format = "step-by-step"

    assert form.to_request() == RewriteRequest(
        originalPrompt="write code",
        role="Expert Developer",
        context="",
        tone="Technical",
        outputFormat="Step-by-Step",
    )


def test_unknown_choices_fall_back_to_defaults() -> None:
    form = RewriterForm()
    form.role = "pirate"
    form.tone = "grumpy"
    form.output_format = "haiku"

    request = form.to_request()
    assert (request.role, request.tone, request.outputFormat) == ("General Purpose", "Professional", "Detailed")


def test_successful_rewrite_stores_result() -> None:
    form = RewriterForm()
    form.original_prompt = "write code"

    assert form.rewrite(FakeRewriteService()) is True
    assert form.rewritten_prompt == "Improved: write code"
    assert form.error == ""


def test_gateway_error_is_shown_and_unexpected_error_is_generic() -> None:
    form = RewriterForm()
    form.original_prompt = "write code"

    form.rewrite(FakeRewriteService(ServiceError("Service unavailable. Please contact support.", 402)))
    assert form.error == "Service unavailable. Please contact support."

    form.rewrite(FakeRewriteService(RuntimeError("kaboom")))
    assert form.error == REWRITE_FAILED


def test_reset_restores_defaults() -> None:
    form = RewriterForm()
    form.original_prompt = "write code"
    form.rewrite(FakeRewriteService())
    form.role = "analyst"

    form.reset()

    assert form.original_prompt == ""
    assert form.rewritten_prompt == ""
    assert (form.role, form.tone, form.output_format) == ("general", "professional", "detailed")
