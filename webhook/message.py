#!/usr/bin/env python3
from typing import Literal

from pydantic import BaseModel

LINE_SEPARATOR = " \n  "


class MarkdownContent(BaseModel):
    content: str


class Message(BaseModel):
    msgtype: Literal["markdown"] = "markdown"
    markdown: MarkdownContent

    @classmethod
    def from_lines(cls, lines: list[str]) -> "Message":
        return cls(markdown=MarkdownContent(content=LINE_SEPARATOR.join(lines)))
