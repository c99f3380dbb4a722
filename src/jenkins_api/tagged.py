# Copyright (c) Syntropy Systems
"""Closed tagged unions selected by the Jenkins ``_class`` discriminant.

A ``TaggedUnion`` is declared once from a list of shape models, each
carrying its discriminant in ``jenkins_class``, plus a fallback model. The
union decodes a payload into the shape whose tag equals the payload's
``_class``; any other payload (unknown tag, missing tag) decodes into the
fallback, which keeps the raw payload so it can be re-decoded later.

Example:
    BUILDS = TaggedUnion("Build", FreeStyleBuild, WorkflowRun, fallback=UnknownBuild)
    build = BUILDS.decode({"_class": "hudson.model.FreeStyleBuild", ...})

"""

from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Annotated,
    Any,
    ClassVar,
    Generic,
    NoReturn,
    TypeVar,
    Union,
    cast,
)

from pydantic import (
    Discriminator,
    Field,
    SerializerFunctionWrapHandler,
    Tag,
    TypeAdapter,
    ValidationError,
    model_serializer,
    model_validator,
)

from jenkins_api.errors import InvalidObjectType, StructuralDecodeError
from jenkins_api.log import get_logger
from jenkins_api.models.base import CLASS_KEY, JenkinsBaseModel, JSONValue

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from typing_extensions import Self

logger = get_logger(__name__)

FALLBACK_TAG = "Unknown"

T = TypeVar("T")


def read_discriminant(value: object) -> str | None:
    """Return the ``_class`` of a raw payload or a decoded value, if any."""
    if isinstance(value, dict):
        tag = cast("dict[str, object]", value).get(CLASS_KEY)
    elif isinstance(value, UnknownShape):
        tag = value.discriminant
    else:
        tag = getattr(type(value), "jenkins_class", None)
    return tag if isinstance(tag, str) else None


class TaggedShape(JenkinsBaseModel):
    """A known shape of a tagged union."""

    jenkins_class: ClassVar[str]
    object_type: ClassVar[str] = "Object"

    @property
    def variant_name(self) -> str:
        """Name of the concrete shape."""
        return type(self).__name__

    @property
    def discriminant(self) -> str:
        """The ``_class`` this shape was decoded from."""
        return self.jenkins_class

    @model_serializer(mode="wrap")
    def _serialize_with_class(
        self, handler: SerializerFunctionWrapHandler
    ) -> dict[str, Any]:
        data = cast("dict[str, Any]", handler(self))
        return {CLASS_KEY: self.jenkins_class, **data}


class UnknownShape(JenkinsBaseModel):
    """Fallback variant for a payload whose ``_class`` is not modelled."""

    object_type: ClassVar[str] = "Object"

    raw: dict[str, JSONValue] = Field(default_factory=dict)
    discriminant: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _wrap_payload(cls, data: object) -> object:
        # Every dict is a payload, even one whose only key is "raw"
        if isinstance(data, UnknownShape) or not isinstance(data, dict):
            return data
        payload = cast("dict[str, object]", data)
        tag = payload.get(CLASS_KEY)
        return {"raw": payload, "discriminant": tag if isinstance(tag, str) else None}

    @classmethod
    def from_payload(cls, payload: Mapping[str, JSONValue]) -> Self:
        """Wrap ``payload`` as this fallback without looking at its ``_class``."""
        return cls.model_validate(dict(payload))

    @model_serializer(mode="plain")
    def _serialize(self) -> dict[str, JSONValue]:
        return self.raw

    @property
    def variant_name(self) -> str:
        """Always ``"Unknown"``."""
        return FALLBACK_TAG


def unavailable(field: str) -> property:
    """Build a property that fails with ``InvalidObjectType`` on read.

    Fallback models declare one per common field so that reading a common
    field works the same on every variant, failing only on the fallback.
    """

    def fget(self: UnknownShape) -> NoReturn:
        raise InvalidObjectType(
            self.object_type,
            self.variant_name,
            field=field,
            discriminant=self.discriminant,
        )

    return property(fget, doc=f"Not available on unknown variants: {field}")


class TaggedUnion(Generic[T]):
    """A closed set of shapes selected by ``_class``, with a fallback."""

    name: str
    fallback: type[UnknownShape]
    annotation: Any
    _shapes: dict[str, type[TaggedShape]]

    def __init__(
        self,
        name: str,
        *shapes: type[TaggedShape],
        fallback: type[UnknownShape],
    ) -> None:
        """Declare the union.

        Args:
            name: Object type reported in errors (e.g. "Build")
            shapes: Known shapes, matched in declaration order
            fallback: Model used for every unrecognized payload

        Raises:
            TypeError: If no shape is given, a shape has no ``jenkins_class``,
                or two shapes declare the same ``jenkins_class``

        """
        if not shapes:
            msg = f"{name}: a tagged union needs at least one shape"
            raise TypeError(msg)

        self.name = name
        self.fallback = fallback
        self._shapes = {}
        for shape in shapes:
            tag = getattr(shape, "jenkins_class", None)
            if not isinstance(tag, str) or tag == FALLBACK_TAG:
                msg = f"{name}: {shape.__name__} must declare a jenkins_class"
                raise TypeError(msg)
            if tag in self._shapes:
                msg = (
                    f"{name}: _class {tag!r} is declared by both "
                    f"{self._shapes[tag].__name__} and {shape.__name__}"
                )
                raise TypeError(msg)
            self._shapes[tag] = shape

        members = tuple(
            Annotated[shape, Tag(tag)] for tag, shape in self._shapes.items()
        )
        members += (Annotated[fallback, Tag(FALLBACK_TAG)],)
        self.annotation = Annotated[
            Union[members],  # pyright: ignore[reportInvalidTypeArguments]
            Discriminator(self._select_tag),
        ]
        self._adapter = TypeAdapter(self.annotation)
        self._list_adapter = TypeAdapter(list[self.annotation])

    def __repr__(self) -> str:
        shapes = ", ".join(shape.__name__ for shape in self._shapes.values())
        return f"TaggedUnion({self.name}: {shapes}; fallback={self.fallback.__name__})"

    @property
    def tags(self) -> tuple[str, ...]:
        """Known discriminants in declaration order."""
        return tuple(self._shapes)

    @property
    def shapes(self) -> tuple[type[TaggedShape], ...]:
        """Known shapes in declaration order."""
        return tuple(self._shapes.values())

    def is_known(self, tag: str | None) -> bool:
        """Return True if ``tag`` selects a typed shape."""
        return tag is not None and tag in self._shapes

    def shape_for(self, tag: str | None) -> type[TaggedShape] | None:
        """Return the shape selected by ``tag``, or None for the fallback."""
        if tag is None:
            return None
        return self._shapes.get(tag)

    def decode(self, payload: object) -> T:
        """Decode an in-memory payload (usually a dict from ``json.loads``).

        Raises:
            StructuralDecodeError: If a declared field is missing or invalid

        """
        try:
            value = self._adapter.validate_python(payload)
        except ValidationError as e:
            raise StructuralDecodeError(self.name, e.errors()) from e
        self._note_fallback(value)
        return cast("T", value)

    def decode_json(self, data: str | bytes) -> T:
        """Decode a JSON document holding a single object."""
        try:
            value = self._adapter.validate_json(data)
        except ValidationError as e:
            raise StructuralDecodeError(self.name, e.errors()) from e
        self._note_fallback(value)
        return cast("T", value)

    def decode_list(self, payloads: Iterable[object]) -> list[T]:
        """Decode each payload; unrecognized entries become fallbacks."""
        return [self.decode(payload) for payload in payloads]

    def decode_list_json(self, data: str | bytes) -> list[T]:
        """Decode a JSON document holding an array of objects."""
        try:
            values = self._list_adapter.validate_json(data)
        except ValidationError as e:
            raise StructuralDecodeError(f"list of {self.name}", e.errors()) from e
        for value in values:
            self._note_fallback(value)
        return cast("list[T]", values)

    def _select_tag(self, value: object) -> str:
        if isinstance(value, UnknownShape):
            return FALLBACK_TAG
        tag = read_discriminant(value)
        if tag is not None and tag in self._shapes:
            return tag
        return FALLBACK_TAG

    def _note_fallback(self, value: object) -> None:
        if isinstance(value, UnknownShape):
            logger.debug(
                "unrecognized _class, decoded as fallback",
                union=self.name,
                jenkins_class=value.discriminant,
            )


def read_fields(
    value: object, names: Iterable[str]
) -> tuple[dict[str, object], dict[str, InvalidObjectType]]:
    """Read common fields from a decoded value of any variant.

    Returns the values that could be read, and the ``InvalidObjectType``
    raised for each field that could not.
    """
    values: dict[str, object] = {}
    failures: dict[str, InvalidObjectType] = {}
    for name in names:
        try:
            values[name] = getattr(value, name)
        except InvalidObjectType as e:
            failures[name] = e
    return values, failures
