# clean_app.py
import logging
import threading
from typing import Optional

from cachetools import TTLCache
from fastapi import FastAPI, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from dashboard import templates
from shared.auth import SESSION_COOKIE, issue_session, read_session
from shared.catalog import (
    AI_MODELS, FORMATS, LENGTHS, OUTPUT_TYPES, PROMPT_TYPES, REWRITE_TONES, ROLES,
    STEPS, TEMPLATE_CATEGORIES, TONES,
)
from shared.client import PromptServiceClient
from shared.config import configure_logging, get_settings
from shared.rewriter import RewriterForm
from shared.store import PromptStore
from shared.wizard import WizardController, WizardError, WizardState

logger = logging.getLogger(__name__)

app = FastAPI()


def session_cache() -> TTLCache:
    """Per-browser screen state keyed by session id; idle sessions expire"""
    settings = get_settings()
    return TTLCache(maxsize=settings.session_limit, ttl=settings.session_ttl)


_sessions_lock = threading.Lock()
app.state.wizards = session_cache()
app.state.rewriters = session_cache()
app.state.store = None
# Tests replace this with a fake gateway client
app.state.service_factory = None


def get_store() -> PromptStore:
    if app.state.store is None:
        app.state.store = PromptStore(get_settings().prompts_db_path)
    return app.state.store


def get_service(request: Request):
    if app.state.service_factory is not None:
        return app.state.service_factory(request)
    settings = get_settings()
    return PromptServiceClient(settings.gateway_url, request.state.session_token, settings.gateway_timeout)


@app.middleware("http")
async def browser_session(request: Request, call_next):
    """Every browser gets a signed anonymous session cookie"""
    secret_key = get_settings().secret_key
    token = request.cookies.get(SESSION_COOKIE)
    session_id = read_session(token, secret_key)
    issued = session_id is None
    if issued:
        token = issue_session(secret_key)
        session_id = read_session(token, secret_key)
    request.state.session_token = token
    request.state.session_id = session_id

    response = await call_next(request)
    if issued:
        response.set_cookie(key=SESSION_COOKIE, value=token, httponly=True, samesite="lax")
    return response


def session_state(cache, request: Request, factory):
    with _sessions_lock:
        state = cache.get(request.state.session_id)
        if state is None:
            state = factory()
        # Re-set so the TTL counts from the latest visit
        cache[request.state.session_id] = state
        return state


def set_session_state(cache, request: Request, state):
    with _sessions_lock:
        cache[request.state.session_id] = state


def forget_session_state(cache, request: Request):
    with _sessions_lock:
        cache.pop(request.state.session_id, None)


def wizard_for(request: Request) -> WizardController:
    return session_state(app.state.wizards, request, WizardController)


def rewriter_for(request: Request) -> RewriterForm:
    return session_state(app.state.rewriters, request, RewriterForm)


@app.get("/")
async def root():
    return RedirectResponse("/prompt-wizard")


@app.get("/health")
async def health():
    return {"status": "ok"}


# ==================== PROMPT WIZARD ROUTES ====================

@app.get("/prompt-wizard", response_class=HTMLResponse)
def prompt_wizard(
    request: Request,
    goal: Optional[str] = None,
    context: Optional[str] = None,
    outputType: Optional[str] = None,
    template: Optional[str] = None,
):
    """Current wizard step; query values (or a template id) start a pre-filled wizard"""
    prefill = {k: v for k, v in {"goal": goal, "context": context, "outputType": outputType}.items() if v}
    if template:
        prefill = get_store().use_template(template) or prefill

    if prefill:
        # Seed once, then drop the query so a reload keeps progress
        set_session_state(app.state.wizards, request, WizardController(prefill))
        return RedirectResponse("/prompt-wizard", status_code=303)

    controller = wizard_for(request)

    return templates.TemplateResponse(request, "wizard.html", {
        "wizard": controller,
        "steps": STEPS,
        "notice": controller.pop_notice(),
        "summary": controller.state.summary(),
        "output_types": OUTPUT_TYPES.values(),
        "ai_models": AI_MODELS.values(),
        "tones": TONES.values(),
        "lengths": LENGTHS.values(),
    })


@app.post("/prompt-wizard")
def prompt_wizard_action(
    request: Request,
    action: str = Form("next"),
    goal: Optional[str] = Form(None),
    context: Optional[str] = Form(None),
    audience: Optional[str] = Form(None),
    outputType: Optional[str] = Form(None),
    model: Optional[str] = Form(None),
    tone: Optional[str] = Form(None),
    length: Optional[str] = Form(None),
    additionalRequirements: Optional[str] = Form(None),
):
    controller = wizard_for(request)
    submitted = {
        "goal": goal, "context": context, "audience": audience, "outputType": outputType,
        "model": model, "tone": tone, "length": length, "additionalRequirements": additionalRequirements,
    }
    for field in WizardState.field_names():
        if submitted[field] is not None:
            controller.update(field, submitted[field])

    if action == "next":
        controller.next()
    elif action == "prev":
        controller.prev()
    elif action == "reset":
        controller.reset()
        forget_session_state(app.state.wizards, request)
    elif action == "generate":
        try:
            controller.generate(get_service(request))
        except WizardError as e:
            logger.info("Ignoring generate: %s", e)
    else:
        logger.warning("Unknown wizard action: %s", action)

    return RedirectResponse("/prompt-wizard", status_code=303)


@app.post("/prompt-wizard/save")
def prompt_wizard_save(request: Request, title: str = Form("")):
    controller = wizard_for(request)
    if not controller.result:
        return RedirectResponse("/prompt-wizard", status_code=303)
    title = title.strip() or controller.state.goal[:50] or "Untitled prompt"
    get_store().save_prompt(title, controller.result, "wizard")
    return RedirectResponse("/my-prompts", status_code=303)


# ==================== PROMPT REWRITER ROUTES ====================

@app.get("/prompt-rewriter", response_class=HTMLResponse)
def prompt_rewriter(request: Request):
    return templates.TemplateResponse(request, "rewriter.html", {
        "form": rewriter_for(request),
        "roles": ROLES.values(),
        "tones": REWRITE_TONES.values(),
        "formats": FORMATS.values(),
    })


@app.post("/prompt-rewriter")
def prompt_rewriter_action(
    request: Request,
    action: str = Form("rewrite"),
    originalPrompt: str = Form(""),
    role: str = Form("general"),
    context: str = Form(""),
    tone: str = Form("professional"),
    outputFormat: str = Form("detailed"),
):
    if action == "reset":
        forget_session_state(app.state.rewriters, request)
        return RedirectResponse("/prompt-rewriter", status_code=303)

    form = rewriter_for(request)
    form.original_prompt = originalPrompt
    form.role = role
    form.context = context
    form.tone = tone
    form.output_format = outputFormat
    form.rewrite(get_service(request))
    return RedirectResponse("/prompt-rewriter", status_code=303)


@app.post("/prompt-rewriter/save")
def prompt_rewriter_save(request: Request, title: str = Form("")):
    form = rewriter_for(request)
    if not form.rewritten_prompt:
        return RedirectResponse("/prompt-rewriter", status_code=303)
    title = title.strip() or form.original_prompt[:50]
    get_store().save_prompt(title, form.rewritten_prompt, "rewriter")
    return RedirectResponse("/my-prompts", status_code=303)


# ==================== MY PROMPTS & TEMPLATES ====================

@app.get("/my-prompts", response_class=HTMLResponse)
def my_prompts(request: Request, q: str = ""):
    return templates.TemplateResponse(request, "my_prompts.html", {
        "prompts": get_store().list_prompts(q),
        "prompt_types": PROMPT_TYPES,
        "q": q,
    })


@app.post("/my-prompts/{prompt_id}/edit")
def edit_prompt(prompt_id: str, title: str = Form(...), content: str = Form(...)):
    if not get_store().update_prompt(prompt_id, title, content):
        logger.warning("Edit of unknown prompt %s", prompt_id)
    return RedirectResponse("/my-prompts", status_code=303)


@app.post("/my-prompts/{prompt_id}/delete")
def delete_prompt(prompt_id: str):
    get_store().delete_prompt(prompt_id)
    return RedirectResponse("/my-prompts", status_code=303)


@app.get("/templates", response_class=HTMLResponse)
def template_library(request: Request, category: str = "all", q: str = ""):
    return templates.TemplateResponse(request, "templates.html", {
        "templates": get_store().list_templates(category, q),
        "categories": TEMPLATE_CATEGORIES.values(),
        "category": category,
        "q": q,
    })


if __name__ == "__main__":
    import uvicorn

    configure_logging()
    uvicorn.run(app, host="0.0.0.0", port=10000)
