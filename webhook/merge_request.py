#!/usr/bin/env python3
import datetime

from gitlab_model import MergeRequestPayload
from webhook.formatting import commit_line
from webhook.formatting import list_item
from webhook.formatting import project_line

# state -> (verb, admonition)
MR_STATES: dict[str, tuple[str, str]] = {
    "opened": ("opened", ", **request reviewer confirmation**"),
    "closed": ("closed", ", **request submitter double-check**"),
    "locked": ("locked", ""),
    "merged": ("merged", ""),
}


def format_updated_at(updated_at: str) -> str:
    """Format a GitLab timestamp as ``MM-DD HH:mm``.

    GitLab sends either ISO 8601 or ``2025-01-01 00:00:00 UTC``. Values that
    cannot be parsed are returned untouched.
    """
    try:
        parsed = datetime.datetime.fromisoformat(updated_at.replace(" UTC", "+00:00"))
    except ValueError:
        return updated_at
    return parsed.strftime("%m-%d %H:%M")


def merge_request(payload: MergeRequestPayload) -> list[str]:
    attrs = payload.object_attributes
    project = payload.project
    verb, admonition = MR_STATES.get(attrs.state, ("", ""))
    mr_number = attrs.iid if attrs.iid is not None else attrs.id

    content = [
        f"`{payload.user.name}` **{verb}** [[#{mr_number} merge request {attrs.title}]({attrs.url})],"
        f" `{attrs.source_branch}` into `{attrs.target_branch}`{admonition}.",
        project_line(project),
        "**MR details:**\n",
    ]

    if attrs.updated_at:
        content.append(list_item("Updated at", format_updated_at(attrs.updated_at)))
    if attrs.description:
        content.append(list_item("Description", attrs.description))
    if attrs.last_commit is not None and attrs.last_commit.model_fields_set:
        content.append(list_item("Last commit", "\n" + commit_line(attrs.last_commit)))

    return content
