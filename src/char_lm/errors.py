from __future__ import annotations


class PreconditionError(ValueError):
    """Raised when a caller breaks an input contract (bad window length, short corpus or seed text)."""
