# Copyright (c) Syntropy Systems
"""Exceptions raised while decoding and fetching Jenkins payloads."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails


class JenkinsError(Exception):
    """Base class for jenkins_api errors."""


class StructuralDecodeError(JenkinsError):
    """A declared field is missing or has the wrong shape.

    Raised by every decode entry point; the originating pydantic
    ``ValidationError`` is available as ``__cause__``.
    """

    object_type: str
    errors: list[ErrorDetails]

    def __init__(self, object_type: str, errors: list[ErrorDetails]) -> None:
        self.object_type = object_type
        self.errors = errors
        locations = ", ".join(
            ".".join(str(part) for part in error["loc"]) or "<root>"
            for error in errors
        )
        msg = f"Cannot decode {object_type}: invalid field(s) {locations}"
        super().__init__(msg)


class InvalidObjectType(JenkinsError):
    """An operation was attempted on a variant that does not support it.

    The usual cause is reading a common field from the ``Unknown`` variant of
    a tagged union, whose payload was never decoded into typed fields.
    """

    object_type: str
    variant_name: str
    field: str | None
    discriminant: str | None
    action: str

    def __init__(
        self,
        object_type: str,
        variant_name: str,
        *,
        field: str | None = None,
        discriminant: str | None = None,
        action: str | None = None,
    ) -> None:
        self.object_type = object_type
        self.variant_name = variant_name
        self.field = field
        self.discriminant = discriminant
        self.action = action or f"get field '{field}'"
        msg = f"Cannot {self.action} on {object_type} variant {variant_name}"
        if discriminant is not None and discriminant != variant_name:
            msg += f" (_class {discriminant})"
        super().__init__(msg)


class InvalidUrl(JenkinsError):
    """A url cannot be resolved to a path on the configured server."""

    url: str
    expected: str

    def __init__(self, url: str, expected: str) -> None:
        self.url = url
        self.expected = expected
        msg = f"Invalid url for {expected}: {url}"
        super().__init__(msg)


class JenkinsClientError(JenkinsError):
    """Error from Jenkins server communication."""
