class FincoreError(Exception):
    """Base class for errors raised by the engine."""


class RegistryError(FincoreError):
    """Category registry is malformed (duplicate id, missing catch-all, ...)."""


class InvalidBudgetError(FincoreError, ValueError):
    """Budget evaluation was called with a non-positive budget or negative spend."""
