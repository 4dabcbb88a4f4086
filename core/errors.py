"""
Domain Errors

Exceptions raised at the data-entry and scenario-import boundaries.
"""

from typing import Dict, Optional


class InvalidEntryError(ValueError):
    """Raised when an hourly entry holds non-numeric or negative quantities."""

    def __init__(self, invalid: Dict[str, str]):
        self.invalid = dict(invalid)
        details = ", ".join(f"{pid}={value!r}" for pid, value in self.invalid.items())
        super().__init__(f"Invalid hourly quantities: {details}")


class ScenarioImportError(ValueError):
    """Raised when a scenario payload is malformed or incomplete."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)
