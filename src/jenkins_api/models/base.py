# Copyright (c) Syntropy Systems
"""Shared Pydantic model helpers for Jenkins API payloads."""

from __future__ import annotations

from typing import ClassVar, TypeVar, Union, cast

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    JsonValue,
    StrictStr,
    ValidationError,
)
from pydantic.alias_generators import to_camel
from typing_extensions import TypeAlias

from jenkins_api.errors import InvalidObjectType, StructuralDecodeError

JSONPrimitive: TypeAlias = Union[str, int, float, bool, None]
JSONValue: TypeAlias = JsonValue
JSONObject: TypeAlias = dict[str, JSONValue]

# Key Jenkins uses to tag polymorphic payloads with their Java class
CLASS_KEY = "_class"


class JenkinsBaseModel(BaseModel):
    """Base model with shared config for Jenkins schemas.

    Jenkins serializes fields in camelCase; models declare them in
    snake_case and read only the camelCase spelling, so a snake_case key in
    a payload is never taken for a declared field.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(
        alias_generator=to_camel,
        extra="ignore",
        frozen=True,
    )


class ExtraAllowModel(JenkinsBaseModel):
    """Base model that preserves extra fields for flexible schemas."""

    model_config: ClassVar[ConfigDict] = ConfigDict(
        alias_generator=to_camel,
        extra="allow",
        frozen=True,
    )

    @property
    def other_fields(self) -> dict[str, JSONValue]:
        """Fields present in the payload but not declared by the model."""
        return dict(self.model_extra or {})


class OpenRecord(ExtraAllowModel):
    """Record with declared fields plus every undeclared field kept aside.

    ``other_fields`` holds whatever the payload carried beyond the declared
    fields, in payload order; ``to_payload`` reproduces the original keys.
    Subclasses registered with ``register_class`` carry their discriminant
    in ``jenkins_class``.
    """

    object_type: ClassVar[str] = "Object"
    jenkins_class: ClassVar[str | None] = None

    class_name: StrictStr | None = Field(default=None, alias=CLASS_KEY)

    def to_payload(self) -> dict[str, JSONValue]:
        """Re-encode the record with the keys and values it was decoded from."""
        return cast(
            "dict[str, JSONValue]",
            self.model_dump(mode="json", by_alias=True, exclude_unset=True),
        )

    def as_variant(self, target: type[RecordT]) -> RecordT:
        """Decode this record again as a registered specialization.

        Raises:
            InvalidObjectType: If ``target`` is not registered for this
                record's ``_class``
            StructuralDecodeError: If the payload does not fit ``target``

        """
        if target.jenkins_class is None or target.jenkins_class != self.class_name:
            raise InvalidObjectType(
                self.object_type,
                self.class_name or "Unknown",
                discriminant=self.class_name,
                action=f"convert to {target.__name__}",
            )
        try:
            return target.model_validate(self.to_payload())
        except ValidationError as e:
            raise StructuralDecodeError(target.__name__, e.errors()) from e


RecordT = TypeVar("RecordT", bound=OpenRecord)
