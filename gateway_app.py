# gateway_app.py
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response, StreamingResponse
from starlette.background import BackgroundTask

from shared.config import configure_logging, get_settings
from shared.errors import AuthenticationMissing, GatewayError, GENERIC_ERROR
from shared.prompts import build_generate_messages, build_rewrite_messages
from shared.upstream import UpstreamClient
from shared.validation import GenerateRequest, RewriteRequest, validate_payload, wants_stream

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

app = FastAPI(title="Prompt Service Gateway")
# Tests swap in an httpx.MockTransport here
app.state.transport = None


def json_response(body, status_code=200):
    return JSONResponse(body, status_code=status_code, headers=CORS_HEADERS)


def error_response(error: GatewayError):
    return json_response(error.to_body(), error.status)


def upstream_client():
    return UpstreamClient(get_settings(), transport=app.state.transport)


async def read_authorized_json(request: Request):
    """Auth check first, then the body; a bad body never masks a missing credential."""
    if not request.headers.get("authorization"):
        raise AuthenticationMissing()
    return await request.json()


@app.options("/generate-prompt")
@app.options("/rewrite-prompt")
async def preflight():
    return Response(status_code=204, headers=CORS_HEADERS)


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/generate-prompt")
async def generate_prompt(request: Request):
    try:
        # 1. AUTHENTICATION + VALIDATION
        data = await read_authorized_json(request)
        use_stream = wants_stream(data)
        settings = get_settings()
        req = validate_payload(GenerateRequest, data, enforce_catalog=settings.enforce_model_catalog)

        logger.info(
            "Generating prompt: model=%s outputType=%s tone=%s length=%s stream=%s",
            req.aiModel, req.outputType, req.tone, req.length, use_stream,
        )
        messages = build_generate_messages(req)
        upstream = upstream_client()

        # 2. STREAMING RELAY
        if use_stream:
            streamed = await upstream.stream(req.aiModel, messages)
            logger.info("Streaming response to client")
            return StreamingResponse(
                streamed.chunks(),
                media_type="text/event-stream",
                headers={**CORS_HEADERS, "Cache-Control": "no-cache", "Connection": "keep-alive"},
                background=BackgroundTask(streamed.aclose),
            )

        # 3. BUFFERED RESULT
        completion = await upstream.complete(req.aiModel, messages, stream=False)
        logger.info("Successfully generated prompt")
        return json_response({
            "prompt": completion.text,
            "metadata": {
                "model": req.aiModel,
                "outputType": req.outputType,
                "tone": req.tone,
                "length": req.length,
            },
        })

    except GatewayError as e:
        if e.status >= 500:
            logger.error("generate-prompt failed: %s", getattr(e, "detail", e.message))
        return error_response(e)
    except Exception:
        logger.exception("Error in generate-prompt")
        return json_response({"error": GENERIC_ERROR}, 500)


@app.post("/rewrite-prompt")
async def rewrite_prompt(request: Request):
    try:
        data = await read_authorized_json(request)
        req = validate_payload(RewriteRequest, data)

        settings = get_settings()
        model = settings.rewrite_model
        logger.info("Rewriting prompt: role=%s tone=%s format=%s", req.role, req.tone, req.outputFormat)

        completion = await upstream_client().complete(model, build_rewrite_messages(req))
        rewritten = completion.text
        return json_response({
            "rewrittenPrompt": rewritten,
            "metadata": {
                "originalLength": len(req.originalPrompt),
                "rewrittenLength": len(rewritten),
                "model": model,
            },
        })

    except GatewayError as e:
        if e.status >= 500:
            logger.error("rewrite-prompt failed: %s", getattr(e, "detail", e.message))
        return error_response(e)
    except Exception:
        logger.exception("Error in rewrite-prompt")
        return json_response({"error": GENERIC_ERROR}, 500)


if __name__ == "__main__":
    import uvicorn

    configure_logging()
    uvicorn.run(app, host="0.0.0.0", port=8001)
