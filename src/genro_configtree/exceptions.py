# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""ConfigTree exceptions."""

from __future__ import annotations

from typing import Any


class ConfigurationError(Exception):
    """Base exception for ConfigTree errors."""

    pass


class DuplicateNameError(ConfigurationError):
    """Raised when two siblings (or two top-level entries) share a name."""

    def __init__(self, name: str, where: str | None = None) -> None:
        self.name = name
        self.where = where
        location = f" in '{where}'" if where else ""
        super().__init__(f"Already have name '{name}'{location}")


class VersionMismatchError(ConfigurationError):
    """Raised when a document version differs from the established one."""

    def __init__(self, expected: str, found: str | None) -> None:
        self.expected = expected
        self.found = found
        super().__init__(
            f"Versions do not match, expected {expected!r} got {found!r}"
        )


class ConversionError(ConfigurationError, ValueError):
    """Raised when stored text cannot be converted to the requested type."""

    def __init__(self, text: str, target: Any) -> None:
        self.text = text
        self.target = target
        target_name = getattr(target, '__name__', str(target))
        super().__init__(f"Cannot convert: {text!r} to type {target_name}")


class XmlSyntaxError(ConfigurationError):
    """Raised when a configuration document is not well-formed XML."""

    pass
