# Copyright (c) Syntropy Systems
"""Builds of a job, decoded as a closed union of known build classes."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Protocol

from pydantic import Field, StrictBool, StrictInt, StrictStr

from jenkins_api.tagged import (
    TaggedShape,
    TaggedUnion,
    UnknownShape,
    read_fields,
    unavailable,
)

from .action import CommonAction, ShortMavenArtifactRecord
from .base import ExtraAllowModel, JenkinsBaseModel
from .changeset import ChangeSetList, EmptyChangeSet

if TYPE_CHECKING:
    from collections.abc import Sequence

    from jenkins_api.errors import InvalidObjectType


class ShortBuild(ExtraAllowModel):
    """Short build reference used in lists and links from other objects."""

    url: StrictStr
    number: StrictInt


class BuildStatus(str, Enum):
    """Result of a finished build."""

    SUCCESS = "SUCCESS"
    UNSTABLE = "UNSTABLE"
    FAILURE = "FAILURE"
    NOT_BUILT = "NOT_BUILT"
    ABORTED = "ABORTED"


class Artifact(ExtraAllowModel):
    """A file archived by a build."""

    display_path: StrictStr
    file_name: StrictStr
    relative_path: StrictStr


class BuildFields(JenkinsBaseModel):
    """Fields shared by every build, whatever its job type."""

    # URL for the build
    url: StrictStr
    # Build number for this job
    number: StrictInt
    # Duration and estimated duration, in milliseconds
    duration: StrictInt = 0
    estimated_duration: StrictInt = 0
    # Start of the build, in milliseconds since the epoch
    timestamp: StrictInt = 0
    keep_log: StrictBool = False
    # None while the build is running
    result: BuildStatus | None = None
    # Usually "#" followed by the build number
    display_name: StrictStr = ""
    # Job name followed by the build display name
    full_display_name: StrictStr = ""
    description: StrictStr | None = None
    building: StrictBool = False
    # Build number as a string
    id: StrictStr = ""
    # ID while in the build queue
    queue_id: StrictInt = 0
    actions: list[CommonAction] = Field(default_factory=list)
    artifacts: list[Artifact] = Field(default_factory=list)


BUILD_COMMON_FIELDS: tuple[str, ...] = tuple(BuildFields.model_fields)


class BuildView(Protocol):
    """Read access to the common fields of any build.

    Satisfied by every known build shape, by ``UnknownBuild`` (whose
    accessors raise ``InvalidObjectType``) and by ``CommonBuild``.
    """

    @property
    def url(self) -> str: ...
    @property
    def number(self) -> int: ...
    @property
    def duration(self) -> int: ...
    @property
    def estimated_duration(self) -> int: ...
    @property
    def timestamp(self) -> int: ...
    @property
    def keep_log(self) -> bool: ...
    @property
    def result(self) -> BuildStatus | None: ...
    @property
    def display_name(self) -> str: ...
    @property
    def full_display_name(self) -> str: ...
    @property
    def description(self) -> str | None: ...
    @property
    def building(self) -> bool: ...
    @property
    def id(self) -> str: ...
    @property
    def queue_id(self) -> int: ...
    @property
    def actions(self) -> Sequence[CommonAction]: ...
    @property
    def artifacts(self) -> Sequence[Artifact]: ...


class BuildShape(BuildFields, TaggedShape):
    """Base for known build classes."""

    object_type: ClassVar[str] = "Build"


class FreeStyleBuild(BuildShape):
    """A build of a freestyle project."""

    jenkins_class = "hudson.model.FreeStyleBuild"

    # Agent the build ran on, empty for the built-in node
    built_on: StrictStr = ""
    change_set: ChangeSetList = Field(default_factory=EmptyChangeSet)


class WorkflowRun(BuildShape):
    """A build of a pipeline job."""

    jenkins_class = "org.jenkinsci.plugins.workflow.job.WorkflowRun"

    change_sets: list[ChangeSetList] = Field(default_factory=list)
    previous_build: ShortBuild | None = None


class MatrixBuild(BuildShape):
    """A build of a multi-configuration project."""

    jenkins_class = "hudson.matrix.MatrixBuild"

    change_set: ChangeSetList = Field(default_factory=EmptyChangeSet)
    # Runs of each configuration
    runs: list[ShortBuild] = Field(default_factory=list)


class MatrixRun(BuildShape):
    """A build of one configuration of a multi-configuration project."""

    jenkins_class = "hudson.matrix.MatrixRun"

    change_set: ChangeSetList = Field(default_factory=EmptyChangeSet)


class MavenModuleSetBuild(BuildShape):
    """A build of a maven project."""

    jenkins_class = "hudson.maven.MavenModuleSetBuild"

    change_set: ChangeSetList = Field(default_factory=EmptyChangeSet)
    maven_version_used: StrictStr
    built_on: StrictStr = ""


class MavenBuild(BuildShape):
    """A build of one module of a maven project."""

    jenkins_class = "hudson.maven.MavenBuild"

    change_set: ChangeSetList = Field(default_factory=EmptyChangeSet)
    built_on: StrictStr = ""
    maven_artifacts: ShortMavenArtifactRecord | None = None


class UnknownBuild(UnknownShape):
    """A build of a job type that is not modelled.

    The payload is kept in ``raw``; every common field raises
    ``InvalidObjectType`` when read.
    """

    object_type: ClassVar[str] = "Build"

    url = unavailable("url")
    number = unavailable("number")
    duration = unavailable("duration")
    estimated_duration = unavailable("estimated_duration")
    timestamp = unavailable("timestamp")
    keep_log = unavailable("keep_log")
    result = unavailable("result")
    display_name = unavailable("display_name")
    full_display_name = unavailable("full_display_name")
    description = unavailable("description")
    building = unavailable("building")
    id = unavailable("id")
    queue_id = unavailable("queue_id")
    actions = unavailable("actions")
    artifacts = unavailable("artifacts")


BUILDS: TaggedUnion[BuildShape | UnknownBuild] = TaggedUnion(
    "Build",
    FreeStyleBuild,
    WorkflowRun,
    MatrixBuild,
    MatrixRun,
    MavenModuleSetBuild,
    MavenBuild,
    fallback=UnknownBuild,
)
Build = BUILDS.annotation

decode_build = BUILDS.decode
decode_build_json = BUILDS.decode_json
decode_builds = BUILDS.decode_list


def read_build_fields(
    build: BuildView,
) -> tuple[dict[str, object], dict[str, InvalidObjectType]]:
    """Read every common build field, collecting the ones that fail."""
    return read_fields(build, BUILD_COMMON_FIELDS)
