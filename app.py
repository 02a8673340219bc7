#!/usr/bin/env python3
import logging
import os
import sys
import traceback
from contextlib import asynccontextmanager
from typing import Annotated
from typing import Any

import fastapi_structured_logging
import httpx
from fastapi import Body
from fastapi import FastAPI
from fastapi import Header
from fastapi import HTTPException
from fastapi import Request
from fastapi import status
from fastapi.responses import JSONResponse
from fastapi.responses import RedirectResponse
from pydantic import ValidationError

import webhook
from config import config


# Configure structured logging
log_format = os.getenv("LOG_FORMAT", "auto").lower()
log_level = os.getenv("LOG_LEVEL", "INFO").upper()

if log_format == "json":
    fastapi_structured_logging.setup_logging(json_logs=True, log_level=log_level)
elif log_format == "line":
    fastapi_structured_logging.setup_logging(json_logs=False, log_level=log_level)
else:
    fastapi_structured_logging.setup_logging(log_level=log_level)

logging.getLogger("uvicorn.error").disabled = True

logger = fastapi_structured_logging.get_logger()

# X-Gitlab-Event header values accepted on the inbound route
GITLAB_EVENTS = (
    "Push Hook",
    "Tag Push Hook",
    "Issue Hook",
    "Note Hook",
    "Merge Request Hook",
    "Wiki Page Hook",
    "Pipeline Hook",
    "Job Hook",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("starting app version %s", app.version)
    if not config.is_supported_platform():
        logger.warning(
            "configured platform is not supported",
            platform=config.platform,
            supported=list(config.SUPPORTED_PLATFORMS),
        )

    yield


app: FastAPI = FastAPI(
    title="GitLab chat notifier",
    version=os.environ.get("VERSION", "v0.0.0-dev"),
    lifespan=lifespan,
)

app.add_middleware(fastapi_structured_logging.AccessLogMiddleware)


@app.exception_handler(ValidationError)
async def payload_validation_handler(request: Request, exc: ValidationError):
    logger.warning(
        "invalid gitlab payload",
        error_count=exc.error_count(),
        path=request.url.path,
    )
    return JSONResponse(
        status_code=422,
        content={"detail": exc.errors(include_url=False, include_context=False)},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    exc_type, exc_value, exc_traceback = sys.exc_info()

    logger.error(
        "unhandled exception",
        error_type=type(exc).__name__,
        error_detail=str(exc),
        path=request.url.path,
        method=request.method,
        traceback="".join(traceback.format_exception(exc_type, exc_value, exc_traceback)),
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


@app.get("/", response_class=RedirectResponse, status_code=302)
async def root():
    return "/docs"


def validate_platform() -> None:
    if not config.is_supported_platform():
        raise HTTPException(
            status_code=500,
            detail=(
                f"platform {config.platform!r} is not supported,"
                f" only support: {', '.join(config.SUPPORTED_PLATFORMS)}"
            ),
        )


def validate_gitlab_event(gitlab_event: str | None) -> None:
    if gitlab_event and gitlab_event not in GITLAB_EVENTS:
        raise HTTPException(status_code=400, detail=f"x-gitlab-event {gitlab_event!r} is not supported")


async def handle(
    group: str | None,
    payload: dict[str, Any],
    gitlab_event: str | None,
) -> dict[str, str]:
    webhook_url = config.webhook_url(group)
    if not webhook_url:
        raise HTTPException(status_code=404, detail="Webhook Url Not configured")

    validate_platform()
    validate_gitlab_event(gitlab_event)

    logger.info(
        "processing gitlab hook",
        group=group,
        gitlab_event=gitlab_event,
        object_kind=payload.get("object_kind"),
    )

    message = webhook.translate(payload)
    if message is None:
        return {"status": "ignored"}

    timeout = httpx.Timeout(config.DELIVERY_TIMEOUT, connect=5.0)
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            await webhook.deliver(client, webhook_url, message)
    except httpx.HTTPStatusError as exc:
        raise HTTPException(
            status_code=exc.response.status_code,
            detail=exc.response.text,
        )
    return {"status": "ok"}


@app.post("/webhook")
async def handle_default_webhook(
    payload: Annotated[dict[str, Any], Body()],
    x_gitlab_event: Annotated[str | None, Header()] = None,
):
    return await handle(None, payload, x_gitlab_event)


@app.post("/webhook/{path}")
async def handle_group_webhook(
    path: str,
    payload: Annotated[dict[str, Any], Body()],
    x_gitlab_event: Annotated[str | None, Header()] = None,
):
    return await handle(path, payload, x_gitlab_event)


@app.get("/healthz", include_in_schema=False)
async def healthcheck():
    return {
        "ok": config.is_supported_platform(),
        "default_webhook_configured": bool(config.webhook_url()),
    }


if __name__ == "__main__":
    # fmt: off
    print(
        "use fastapi cli to run this app\n"
        "- fastapi run # for prod\n"
        "- fastapi dev # for dev :)\n"
    )
    # fmt: on

    # for debug entry point
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
