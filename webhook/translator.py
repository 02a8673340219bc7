#!/usr/bin/env python3
from collections.abc import Callable
from collections.abc import Mapping
from typing import Any

import fastapi_structured_logging

from pydantic import BaseModel

from gitlab_model import MergeRequestPayload
from gitlab_model import PipelinePayload
from gitlab_model import PushPayload
from gitlab_model import TagPushPayload
from webhook.merge_request import merge_request
from webhook.message import Message
from webhook.pipeline import pipeline
from webhook.push import push
from webhook.push import tag_push


logger = fastapi_structured_logging.get_logger()

# recognised by GitLab but not rendered
UNHANDLED_KINDS = ("issue", "note", "wiki_page", "build")

HANDLERS: dict[str, tuple[type[BaseModel], Callable[[Any], list[str] | None]]] = {
    "push": (PushPayload, push),
    "tag_push": (TagPushPayload, tag_push),
    "merge_request": (MergeRequestPayload, merge_request),
    "pipeline": (PipelinePayload, pipeline),
}


def translate(payload: Mapping[str, Any] | None) -> Message | None:
    """Translate a raw GitLab hook payload into a chat message.

    Returns None when nothing must be delivered: unsupported object kinds and
    pipelines that still have unsettled builds. Raises
    ``pydantic.ValidationError`` when a supported payload has the wrong shape.
    """
    if not isinstance(payload, Mapping):
        return None

    object_kind = payload.get("object_kind")
    handler = HANDLERS.get(object_kind) if isinstance(object_kind, str) else None
    if handler is None:
        logger.info(
            "ignoring unsupported hook",
            object_kind=object_kind,
            known_unhandled=object_kind in UNHANDLED_KINDS,
        )
        return None

    model, build_lines = handler
    lines = build_lines(model.model_validate(payload))
    if lines is None:
        return None
    return Message.from_lines(lines)
