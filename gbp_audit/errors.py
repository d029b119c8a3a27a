"""
Exception types shared across the auditor.
"""
from typing import List, Optional


class AuditError(Exception):
    """Base class for auditor errors."""
    pass


class ValidationError(AuditError, ValueError):
    """Required input is missing or malformed. Raised before any API call."""

    def __init__(self, message: str, fields: Optional[List[str]] = None):
        super().__init__(message)
        self.fields = fields or []


class GenerationError(AuditError):
    """The generation service failed, timed out, or broke the response contract."""

    def __init__(self, message: str, issues: Optional[List[str]] = None):
        super().__init__(message)
        self.issues = issues or []


class PersistenceCorruption(AuditError):
    """Stored data could not be decoded. Logged, never propagated."""

    def __init__(self, key: str, reason: str):
        super().__init__(f"Stored value for '{key}' is unreadable: {reason}")
        self.key = key
        self.reason = reason


class AuditInProgressError(AuditError):
    """An audit request is already in flight for this session."""
    pass
