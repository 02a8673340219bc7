#!/usr/bin/env python3
from typing import Any
from typing import Literal

from pydantic import BaseModel
from pydantic import Field
from pydantic import ValidationInfo
from pydantic import field_validator

ZERO_HASH = "0" * 40


class GLModel(BaseModel, extra="allow"):
    """Base for GitLab payload records; an explicit null falls back to the field default."""

    @field_validator("*", mode="before")
    @classmethod
    def null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is not None or info.field_name is None:
            return value
        field = cls.model_fields[info.field_name]
        if field.is_required():
            return value
        return field.get_default(call_default_factory=True)


class GLProject(GLModel):
    name: str = ""
    path_with_namespace: str = ""
    web_url: str = ""


class GLUser(GLModel):
    name: str = ""
    username: str = ""


class GLAuthor(GLModel):
    name: str = ""


class GLCommit(GLModel):
    message: str = ""
    url: str = ""
    author: GLAuthor = Field(default_factory=GLAuthor)

    # only counted, content is never rendered
    added: list[str] = Field(default_factory=list)
    modified: list[str] = Field(default_factory=list)
    removed: list[str] = Field(default_factory=list)


class PushPayload(GLModel):
    object_kind: Literal["push"]
    user_name: str = ""
    ref: str = ""
    before: str = ""
    after: str = ""
    project: GLProject = Field(default_factory=GLProject)
    commits: list[GLCommit] = Field(default_factory=list)
    total_commits_count: int = 0


class TagPushPayload(GLModel):
    object_kind: Literal["tag_push"]
    user_name: str = ""
    ref: str = ""
    before: str = ""
    after: str = ""
    message: str | None = None
    project: GLProject = Field(default_factory=GLProject)
    commits: list[GLCommit] = Field(default_factory=list)
    total_commits_count: int = 0


class GLMRAttributes(GLModel):
    id: int | None = None  # ID is this instance wide merge request id
    iid: int | None = None  # IID is this project's merge request id
    title: str = ""
    description: str | None = None
    state: str = ""
    url: str = ""
    source_branch: str = ""
    target_branch: str = ""
    updated_at: str | None = None
    last_commit: GLCommit | None = None


class MergeRequestPayload(GLModel):
    object_kind: Literal["merge_request"]
    user: GLUser = Field(default_factory=GLUser)
    project: GLProject = Field(default_factory=GLProject)
    object_attributes: GLMRAttributes = Field(default_factory=GLMRAttributes)


class GLPipelineMR(GLModel):
    title: str = ""
    url: str = ""
    source_branch: str = ""
    target_branch: str = ""


class GLPipelineBuild(GLModel):
    id: int | None = None
    stage: str = ""
    name: str = ""
    status: str = ""
    user: GLUser | None = None


class GLPipelineAttributes(GLModel):
    id: int | None = None
    ref: str = ""
    status: str = ""
    source: str = ""
    duration: float | None = None
    stages: list[str] = Field(default_factory=list)


class PipelinePayload(GLModel):
    object_kind: Literal["pipeline"]
    user: GLUser = Field(default_factory=GLUser)
    project: GLProject = Field(default_factory=GLProject)
    object_attributes: GLPipelineAttributes = Field(default_factory=GLPipelineAttributes)
    merge_request: GLPipelineMR | None = None
    commit: GLCommit | None = None
    builds: list[GLPipelineBuild] = Field(default_factory=list)
