"""Exceptions raised by the chaosflow codec."""


class StructuralError(ValueError):
    """Raised when a canonical document lacks a field the parse cannot do without."""
