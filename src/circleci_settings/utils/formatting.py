"""Text formatting utilities."""

from __future__ import annotations


def mask_secret(value: str) -> str:
    """Hide a secret for display, keeping the last four characters of long values.

    Args:
        value: Secret to mask

    Returns:
        ``(not set)`` for an empty value, ``***`` for short ones, otherwise
        asterisks followed by the last four characters
    """
    if not value:
        return "(not set)"
    if len(value) <= 8:
        return "***"
    return "*" * (len(value) - 4) + value[-4:]
