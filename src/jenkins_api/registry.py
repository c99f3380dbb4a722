# Copyright (c) Syntropy Systems
"""Registry of Jenkins ``_class`` names and the open records that model them.

Registration happens at import time through ``register_class``; lookups
afterwards never block. The default registry ``CLASS_REGISTRY`` is shared
by the whole process.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Callable, TypeVar

from pydantic import ValidationError

from jenkins_api.errors import StructuralDecodeError
from jenkins_api.log import get_logger
from jenkins_api.models.base import OpenRecord

if TYPE_CHECKING:
    from jenkins_api.models.base import JSONValue

logger = get_logger(__name__)

RecordT = TypeVar("RecordT", bound=OpenRecord)


class ClassRegistry:
    """Table mapping ``_class`` names to record types."""

    def __init__(self) -> None:
        self._classes: dict[str, type[OpenRecord]] = {}
        self._lock = threading.Lock()

    def __contains__(self, jenkins_class: object) -> bool:
        return jenkins_class in self._classes

    def __len__(self) -> int:
        return len(self._classes)

    def register(self, jenkins_class: str, record_type: type[RecordT]) -> type[RecordT]:
        """Register ``record_type`` for ``jenkins_class``.

        Registering the same pair twice is a no-op.

        Raises:
            ValueError: If another type is already registered for the class

        """
        with self._lock:
            existing = self._classes.get(jenkins_class)
            if existing is not None and existing is not record_type:
                msg = (
                    f"_class {jenkins_class!r} is already registered "
                    f"to {existing.__name__}"
                )
                raise ValueError(msg)
            self._classes[jenkins_class] = record_type
        logger.debug(
            "registered class",
            jenkins_class=jenkins_class,
            record_type=record_type.__name__,
        )
        return record_type

    def lookup(self, jenkins_class: str | None) -> type[OpenRecord] | None:
        """Return the type registered for ``jenkins_class``, if any."""
        if jenkins_class is None:
            return None
        return self._classes.get(jenkins_class)

    def classes(self) -> dict[str, type[OpenRecord]]:
        """Return a snapshot of all registrations."""
        return dict(self._classes)

    def specialize(self, record: RecordT) -> RecordT:
        """Re-decode ``record`` as the type registered for its ``_class``.

        The record is returned unchanged when its class is not registered,
        or when the registered type is not a specialization of the record's
        own type.
        """
        target = self.lookup(record.class_name)
        if target is None or type(record) is target:
            return record
        if not issubclass(target, type(record)):
            logger.debug(
                "registered type does not specialize record",
                jenkins_class=record.class_name,
                record_type=type(record).__name__,
                registered_type=target.__name__,
            )
            return record
        try:
            return target.model_validate(record.to_payload())
        except ValidationError as e:
            raise StructuralDecodeError(target.__name__, e.errors()) from e


CLASS_REGISTRY = ClassRegistry()


def register_class(
    jenkins_class: str,
    registry: ClassRegistry | None = None,
) -> Callable[[type[RecordT]], type[RecordT]]:
    """Class decorator registering an open record for ``jenkins_class``.

    Example:
        @register_class("hudson.matrix.MatrixRun")
        class MatrixRunRecord(CommonBuild):
            ...

    """

    def decorator(record_type: type[RecordT]) -> type[RecordT]:
        target = CLASS_REGISTRY if registry is None else registry
        _ = target.register(jenkins_class, record_type)
        record_type.jenkins_class = jenkins_class
        return record_type

    return decorator


def decode_record(
    payload: object,
    record_type: type[RecordT],
    *,
    specialize: bool = False,
    registry: ClassRegistry | None = None,
) -> RecordT:
    """Decode a payload into an open record.

    Declared fields are validated; every other field is kept in
    ``other_fields``. With ``specialize``, the result is re-decoded as the
    type registered for its ``_class`` when there is one.

    Raises:
        StructuralDecodeError: If a declared field is missing or invalid

    """
    try:
        record = record_type.model_validate(payload)
    except ValidationError as e:
        raise StructuralDecodeError(record_type.__name__, e.errors()) from e
    return _after_decode(record, specialize, registry)


def decode_record_json(
    data: str | bytes,
    record_type: type[RecordT],
    *,
    specialize: bool = False,
    registry: ClassRegistry | None = None,
) -> RecordT:
    """Decode a JSON document into an open record (see ``decode_record``)."""
    try:
        record = record_type.model_validate_json(data)
    except ValidationError as e:
        raise StructuralDecodeError(record_type.__name__, e.errors()) from e
    return _after_decode(record, specialize, registry)


def decode_records(
    payloads: list[JSONValue],
    record_type: type[RecordT],
    *,
    specialize: bool = False,
    registry: ClassRegistry | None = None,
) -> list[RecordT]:
    """Decode each payload of a list into an open record."""
    return [
        decode_record(
            payload, record_type, specialize=specialize, registry=registry
        )
        for payload in payloads
    ]


def _after_decode(
    record: RecordT,
    specialize: bool,  # noqa: FBT001
    registry: ClassRegistry | None,
) -> RecordT:
    if registry is None:
        registry = CLASS_REGISTRY
    if record.class_name is not None and record.class_name not in registry:
        logger.debug(
            "unregistered _class, kept as common record",
            jenkins_class=record.class_name,
            record_type=type(record).__name__,
        )
    if specialize:
        return registry.specialize(record)
    return record
