# Copyright (c) Syntropy Systems
"""Builds decoded as open records.

``CommonBuild`` accepts a build of any job type: the common fields are
declared, everything else lands in ``other_fields``. Specializations are
registered by ``_class`` and selected through the class registry.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from jenkins_api.registry import (
    ClassRegistry,
    decode_record,
    decode_record_json,
    register_class,
)

from .base import OpenRecord
from .build import BuildFields, ShortBuild
from .changeset import CommonChangeSetList
from .user import ShortUser


class CommonBuild(BuildFields, OpenRecord):
    """A build of any job type."""

    object_type: ClassVar[str] = "Build"


@register_class("hudson.matrix.MatrixBuild")
class MatrixBuildRecord(CommonBuild):
    """A build of a multi-configuration project."""

    change_set: CommonChangeSetList = Field(default_factory=CommonChangeSetList)
    # Runs of each configuration
    runs: list[ShortBuild] = Field(default_factory=list)
    # Users who made a change since the last non-broken build
    culprits: list[ShortUser] = Field(default_factory=list)


@register_class("hudson.matrix.MatrixRun")
class MatrixRunRecord(CommonBuild):
    """A build of one configuration of a multi-configuration project."""

    change_set: CommonChangeSetList = Field(default_factory=CommonChangeSetList)
    culprits: list[ShortUser] = Field(default_factory=list)


def decode_build_record(
    payload: object,
    *,
    specialize: bool = True,
    registry: ClassRegistry | None = None,
) -> CommonBuild:
    """Decode a build payload of any job type as an open record."""
    return decode_record(
        payload, CommonBuild, specialize=specialize, registry=registry
    )


def decode_build_record_json(
    data: str | bytes,
    *,
    specialize: bool = True,
    registry: ClassRegistry | None = None,
) -> CommonBuild:
    """Decode a JSON build document of any job type as an open record."""
    return decode_record_json(
        data, CommonBuild, specialize=specialize, registry=registry
    )
