# Copyright (c) Syntropy Systems
"""Actions attached to builds and jobs."""

from __future__ import annotations

from typing import ClassVar

from pydantic import StrictStr

from .base import ExtraAllowModel, OpenRecord


class CommonAction(OpenRecord):
    """An action of any kind.

    Jenkins reports actions as a list mixing empty objects and plugin
    specific payloads; every field other than ``_class`` is kept in
    ``other_fields``.
    """

    object_type: ClassVar[str] = "Action"

    @property
    def is_empty(self) -> bool:
        """True for the ``{}`` placeholders Jenkins emits for hidden actions."""
        return self.class_name is None and not self.other_fields


class ShortMavenArtifactRecord(ExtraAllowModel):
    """Link to the artifacts recorded by a maven build."""

    url: StrictStr | None = None
