#!/usr/bin/env python3
from gitlab_model import PushPayload
from gitlab_model import TagPushPayload
from gitlab_model import ZERO_HASH
from webhook.formatting import format_commits
from webhook.formatting import list_item
from webhook.formatting import project_line


def commits_section(payload: PushPayload | TagPushPayload) -> list[str]:
    if not payload.total_commits_count:
        return []
    return [
        f"**{payload.total_commits_count} commits in total:**\n",
        list_item("", format_commits(payload.commits)),
    ]


def push(payload: PushPayload) -> list[str]:
    project = payload.project
    branch = payload.ref.replace("refs/heads/", "", 1)

    if payload.before == ZERO_HASH:
        op = "created branch"
    elif payload.after == ZERO_HASH:
        op = "deleted branch"
    else:
        op = "pushed to"

    content = [
        f"`{payload.user_name}` {op}"
        f" [[{project.path_with_namespace}/{branch}]({project.web_url}/tree/{branch})].",
        project_line(project),
    ]
    content.extend(commits_section(payload))
    return content


def tag_push(payload: TagPushPayload) -> list[str]:
    project = payload.project
    tag = payload.ref.replace("refs/tags/", "", 1)

    # an update of an existing tag has no operation label
    op = ""
    if payload.before == ZERO_HASH:
        op = "added "
    elif payload.after == ZERO_HASH:
        op = "removed "

    content = [
        f"`{payload.user_name}` {op}tag"
        f" [[{project.path_with_namespace}/{tag}]({project.web_url}/-/tags/{tag})].",
        project_line(project),
    ]
    if payload.message:
        content.append(list_item("Message", payload.message))
    content.extend(commits_section(payload))
    return content
