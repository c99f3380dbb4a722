# Copyright (c) Syntropy Systems
"""Types describing changes between two builds."""

from __future__ import annotations

from enum import Enum
from typing import ClassVar

from pydantic import Field, StrictInt, StrictStr

from jenkins_api.tagged import TaggedShape, TaggedUnion, UnknownShape, unavailable

from .base import ExtraAllowModel, JenkinsBaseModel, OpenRecord
from .user import ShortUser


class EditType(str, Enum):
    """Edit type on a file."""

    ADD = "add"
    EDIT = "edit"
    DELETE = "delete"


class PathChange(ExtraAllowModel):
    """A file that was changed, and how."""

    file: StrictStr
    edit_type: EditType


# --- Change set entries ---


class ChangeSetFields(JenkinsBaseModel):
    """Fields shared by every change set entry."""

    msg: StrictStr
    timestamp: StrictInt
    author: ShortUser
    commit_id: StrictStr | None = None
    affected_paths: list[StrictStr] | None = None


class ChangeSetShape(ChangeSetFields, TaggedShape):
    """Base for known change set entries."""

    object_type: ClassVar[str] = "ChangeSet"


class GitChangeSet(ChangeSetShape):
    """Changes found from git."""

    jenkins_class = "hudson.plugins.git.GitChangeSet"

    comment: StrictStr
    author_email: StrictStr
    commit_id: StrictStr
    date: StrictStr
    id: StrictStr
    affected_paths: list[StrictStr]
    paths: list[PathChange] = Field(default_factory=list)


class ChangeLogEntry(ChangeSetShape):
    """Changes found from a repo manifest."""

    jenkins_class = "hudson.plugins.repo.ChangeLogEntry"


class UnknownChangeSet(UnknownShape):
    """Change set entry from an SCM plugin that is not modelled."""

    object_type: ClassVar[str] = "ChangeSet"

    msg = unavailable("msg")
    timestamp = unavailable("timestamp")
    author = unavailable("author")
    commit_id = unavailable("commit_id")
    affected_paths = unavailable("affected_paths")


CHANGE_SETS: TaggedUnion[ChangeSetShape | UnknownChangeSet] = TaggedUnion(
    "ChangeSet",
    GitChangeSet,
    ChangeLogEntry,
    fallback=UnknownChangeSet,
)
ChangeSet = CHANGE_SETS.annotation

CHANGE_SET_COMMON_FIELDS: tuple[str, ...] = tuple(ChangeSetFields.model_fields)


# --- Change set lists ---


class ChangeSetListShape(TaggedShape):
    """Base for known change set lists."""

    object_type: ClassVar[str] = "ChangeSetList"


class EmptyChangeSet(ChangeSetListShape):
    """No changes recorded."""

    jenkins_class = "hudson.scm.EmptyChangeLogSet"


class GitChangeSetList(ChangeSetListShape):
    """Changes found from git."""

    jenkins_class = "hudson.plugins.git.GitChangeSetList"

    kind: StrictStr
    items: list[ChangeSet] = Field(default_factory=list)


class RepoChangeLogSet(ChangeSetListShape):
    """Changes found from a repo manifest."""

    jenkins_class = "hudson.plugins.repo.RepoChangeLogSet"

    kind: StrictStr
    items: list[ChangeSet] = Field(default_factory=list)


class FilteredChangeLogSet(ChangeSetListShape):
    """Changes filtered by maven module."""

    jenkins_class = "hudson.maven.FilteredChangeLogSet"

    kind: StrictStr | None = None
    items: list[ChangeSet] = Field(default_factory=list)


class UnknownChangeSetList(UnknownShape):
    """Change set list from an SCM plugin that is not modelled."""

    object_type: ClassVar[str] = "ChangeSetList"


CHANGE_SET_LISTS: TaggedUnion[ChangeSetListShape | UnknownChangeSetList] = TaggedUnion(
    "ChangeSetList",
    EmptyChangeSet,
    GitChangeSetList,
    RepoChangeLogSet,
    FilteredChangeLogSet,
    fallback=UnknownChangeSetList,
)
ChangeSetList = CHANGE_SET_LISTS.annotation


# --- Open records ---


class CommonChangeSet(ChangeSetFields, OpenRecord):
    """A change set entry of any SCM, extra fields kept in ``other_fields``."""

    object_type: ClassVar[str] = "ChangeSet"


class CommonChangeSetList(OpenRecord):
    """A change set list of any SCM, extra fields kept in ``other_fields``."""

    object_type: ClassVar[str] = "ChangeSetList"

    kind: StrictStr | None = None
    items: list[CommonChangeSet] = Field(default_factory=list)
