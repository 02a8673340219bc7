#!/usr/bin/env python3
from enum import Enum
from typing import NamedTuple

from gitlab_model import GLCommit
from gitlab_model import GLProject


class Chat_Color(Enum):
    DEFAULT = "comment"
    INFO = "info"
    WARNING = "warning"


class StatusFormat(NamedTuple):
    color: Chat_Color
    label: str
    notify: bool = True


STATUSES: dict[str, StatusFormat] = {
    "failed": StatusFormat(Chat_Color.WARNING, "failed"),
    "success": StatusFormat(Chat_Color.INFO, "succeeded"),
    "running": StatusFormat(Chat_Color.DEFAULT, "running"),
    # not used to gate notifications yet
    "pending": StatusFormat(Chat_Color.WARNING, "pending", notify=False),
    "canceled": StatusFormat(Chat_Color.DEFAULT, "canceled"),
    "skipped": StatusFormat(Chat_Color.DEFAULT, "skipped"),
    "manual": StatusFormat(Chat_Color.DEFAULT, "needs manual trigger"),
}

TRIGGER_SOURCES: dict[str, str] = {
    "push": "push trigger",
    "merge_request_event": "merge trigger",
    "web": "manual web trigger",
}


def format_status(status: str) -> StatusFormat:
    return STATUSES.get(status, StatusFormat(Chat_Color.DEFAULT, f"unknown status ({status})"))


def colored_status(status: str) -> str:
    fmt = format_status(status)
    return f'<font color="{fmt.color.value}">{fmt.label}</font>'


def format_source(source: str) -> str:
    return TRIGGER_SOURCES.get(source, f"trigger ({source})")


def format_duration(duration: float) -> str:
    """Render a pipeline duration in seconds.

    Fractions of a second are dropped. Durations of an hour or more are left
    in seconds.
    """
    duration = int(duration)
    if duration < 60:
        return f"{duration} seconds"
    if duration < 3600:
        return f"{duration // 60}m{duration % 60}s"
    return f"{duration} seconds"


def collapse_whitespace(text: str) -> str:
    return " ".join(text.split())


def list_item(label: str, text: str) -> str:
    if label:
        label = label + ":"
    return f">{label} {text}"


def project_line(project: GLProject) -> str:
    return f"> Project [[{project.name} | {project.path_with_namespace}]({project.web_url})]\n"


def commit_line(commit: GLCommit) -> str:
    return f"{commit.author.name}: [{collapse_whitespace(commit.message)}]({commit.url})"


def format_commits(commits: list[GLCommit]) -> str:
    """Summarize changed file counts over all commits, then one line per commit."""
    added = sum(len(commit.added) for commit in commits)
    modified = sum(len(commit.modified) for commit in commits)
    removed = sum(len(commit.removed) for commit in commits)

    return (
        f"Added: `{added}` Modified: `{modified}` Removed: `{removed}` \n "
        + "\n".join(commit_line(commit) for commit in commits)
    )
