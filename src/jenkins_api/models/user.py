# Copyright (c) Syntropy Systems
"""User references, not always Jenkins users."""

from __future__ import annotations

from pydantic import StrictStr

from .base import ExtraAllowModel


class ShortUser(ExtraAllowModel):
    """Short user reference used in lists and links from other objects."""

    full_name: StrictStr
    absolute_url: StrictStr
