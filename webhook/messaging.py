#!/usr/bin/env python3
from typing import Any

import fastapi_structured_logging
import httpx

from webhook.message import Message


logger = fastapi_structured_logging.get_logger()

HEADERS = {"Content-Type": "application/json; charset=UTF-8"}


async def deliver(
    client: httpx.AsyncClient,
    webhook_url: str,
    message: Message,
) -> Any:
    """POST a message to a chat incoming webhook and return the decoded response."""
    try:
        res = await client.request(
            "POST",
            webhook_url,
            json=message.model_dump(),
            headers=HEADERS,
        )
        res.raise_for_status()
    except Exception:
        logger.error(
            "failed to deliver message",
            method="POST",
            status_code=res.status_code if "res" in locals() else None,
            exc_info=True,
        )
        raise

    logger.info("message delivered", status_code=res.status_code)
    try:
        return res.json()
    except ValueError:
        return res.text
