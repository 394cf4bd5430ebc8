"""Exceptions raised by the logo_balance pipeline."""

from __future__ import annotations

from typing import Any


class LogoBalanceError(Exception):
    """Base class for all pipeline errors."""


class DecodeError(LogoBalanceError):
    """Raised when a logo source cannot be turned into a pixel buffer."""

    def __init__(self, source: Any, reason: str) -> None:
        super().__init__(f"Failed to decode {_describe(source)}: {reason}")
        self.source = source
        self.reason = reason


class EmptyContentError(LogoBalanceError):
    """Raised when an image contains no foreground pixels."""


class InvalidConfigurationError(LogoBalanceError, ValueError):
    """Raised for out-of-range normalization settings."""


def _describe(source: Any) -> str:
    if isinstance(source, (bytes, bytearray)):
        return f"<{len(source)} bytes>"
    text = str(source)
    if text.startswith("data:") and len(text) > 48:
        return text[:45] + "..."
    return text
