#!/usr/bin/env python3
import fastapi_structured_logging

from gitlab_model import GLPipelineBuild
from gitlab_model import PipelinePayload
from webhook.formatting import colored_status
from webhook.formatting import commit_line
from webhook.formatting import format_duration
from webhook.formatting import format_source
from webhook.formatting import list_item
from webhook.formatting import project_line


logger = fastapi_structured_logging.get_logger()

UNSETTLED_STATUSES = ("created", "running", "pending")


def format_build(build: GLPipelineBuild, username: str, web_url: str) -> str:
    by_who = ""
    if build.user is not None and build.user.username != username:
        by_who = f", triggered by {build.user.name}"
    return (
        f"`{build.stage}`: [`{build.name}`]({web_url}/-/jobs/{build.id})"
        f" > {colored_status(build.status)}{by_who}"
    )


def pipeline(payload: PipelinePayload) -> list[str] | None:
    attrs = payload.object_attributes
    project = payload.project

    unsettled = [build for build in payload.builds if build.status in UNSETTLED_STATUSES]
    if unsettled:
        logger.info(
            "suppressing pipeline hook until all builds settle",
            pipeline_id=attrs.id,
            unsettled_builds=[build.id for build in unsettled],
        )
        return None

    pipeline_url = f"{project.web_url}/pipelines/{attrs.id}"
    content = [
        f"[[#{attrs.id} pipeline]({pipeline_url})] {colored_status(attrs.status)},"
        f" on branch {attrs.ref}, via {format_source(attrs.source)}.",
        project_line(project),
        "**Pipeline details:**\n",
    ]

    if payload.user.name:
        content.append(list_item("Operator", f"`{payload.user.name}`"))
    if attrs.duration:
        content.append(list_item("Duration", format_duration(attrs.duration)))
    if attrs.stages:
        content.append(list_item(f"{len(attrs.stages)} stages", " / ".join(attrs.stages)))

    mr = payload.merge_request
    if mr is not None and mr.model_fields_set:
        content.append(
            list_item(
                "Merge request",
                f"[{mr.title}]({mr.url}), `{mr.source_branch}` into `{mr.target_branch}`",
            )
        )
    if payload.commit is not None and payload.commit.model_fields_set:
        content.append(list_item("Last commit", "\n" + commit_line(payload.commit)))
    if payload.builds:
        builds = [format_build(build, payload.user.username, project.web_url) for build in payload.builds]
        content.append(list_item("Builds", "\n" + "\n".join(builds)))

    return content
