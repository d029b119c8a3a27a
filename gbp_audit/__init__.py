"""
Google Business Profile Auditor - Source Package
"""
from .errors import AuditError, AuditInProgressError, GenerationError, PersistenceCorruption, ValidationError
from .models import AuditBreakdownItem, AuditEntry, AuditResult, DraftForm, Recommendation
from .input_handler import AuditRequest, BusinessInput, validate_audit_request, validate_business_input
from .score_validator import validate_audit_result, parse_audit_result
from .storage import KeyValueStore
from .history import HistoryLog
from .drafts import DraftStore
from .session import AuditSession

__all__ = [
    "AuditError",
    "AuditInProgressError",
    "GenerationError",
    "PersistenceCorruption",
    "ValidationError",
    "AuditBreakdownItem",
    "AuditEntry",
    "AuditResult",
    "DraftForm",
    "Recommendation",
    "AuditRequest",
    "BusinessInput",
    "validate_audit_request",
    "validate_business_input",
    "validate_audit_result",
    "parse_audit_result",
    "KeyValueStore",
    "HistoryLog",
    "DraftStore",
    "AuditSession",
]
