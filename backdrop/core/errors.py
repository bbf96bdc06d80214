"""
Domain exceptions.

Every error carries a snake_case `code` and a human-readable `message`,
so callers can log or display them uniformly:

    except BackdropError as exc:
        logger.warning("[%s] %s", exc.code, exc.message)

Degenerate pixel input never escapes the analyser; `InvalidBufferError`
is caught there and turned into the default classification.
"""

from __future__ import annotations


class BackdropError(Exception):
    """Base exception for all domain errors raised inside the package."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)


class InvalidBufferError(BackdropError):
    def __init__(self, message: str) -> None:
        super().__init__("invalid_buffer", message)


class UnknownStrategyError(BackdropError):
    def __init__(self, name: str, available: list[str]) -> None:
        super().__init__(
            "unknown_strategy",
            f"Unknown brightness strategy '{name}'. "
            f"Available: {', '.join(sorted(available))}.",
        )
