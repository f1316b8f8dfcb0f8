# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Exception types raised by the TCO calculation pipeline."""

from __future__ import annotations

from typing import Any


class TCOError(Exception):
    """Base class for all calculation errors."""


class MalformedInputError(TCOError):
    """The request body could not be read as a configuration object."""


class ValidationError(TCOError, ValueError):
    """A configuration field violates its documented bound.

    Attributes:
        field: Request key of the offending field (e.g. ``airRacks``).
        minimum: Lower bound of the accepted range, if any.
        maximum: Upper bound of the accepted range, if any.
        value: The rejected value as received.
    """

    def __init__(
        self,
        field: str,
        message: str,
        *,
        minimum: float | None = None,
        maximum: float | None = None,
        value: Any = None,
    ) -> None:
        self.field = field
        self.minimum = minimum
        self.maximum = maximum
        self.value = value
        super().__init__(f"{field}: {message}")

    @property
    def detail(self) -> str:
        """The message without the field prefix."""
        return str(self).split(": ", 1)[-1]
