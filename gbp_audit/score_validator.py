"""
Score validator to ensure audit results are valid before they reach the caller.
"""
import logging
import os
from dataclasses import dataclass, field
from typing import Any, List, Optional

from pydantic import ValidationError as PydanticValidationError

from .errors import GenerationError
from .models import AuditResult
from .prompts import MIN_BREAKDOWN_CATEGORIES, MIN_RECOMMENDATIONS

logger = logging.getLogger(__name__)

# When false, the 6-category / 4-recommendation minimums only produce warnings.
STRICT_MINIMUMS = os.getenv("STRICT_MINIMUMS", "true").lower() == "true"

# Max gap between overallScore and the mean category score before we warn
SCORE_DRIFT_TOLERANCE = 25

REQUIRED_FIELDS = ['overallScore', 'auditBreakdown', 'recommendations']


@dataclass
class ValidationIssue:
    """Single validation issue."""
    field: str
    message: str
    severity: str = "error"  # "error" or "warning"


@dataclass
class ValidationResult:
    """Result of audit validation."""
    is_valid: bool
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)

    def add_error(self, field: str, message: str):
        self.errors.append(ValidationIssue(field, message, "error"))
        self.is_valid = False

    def add_warning(self, field: str, message: str):
        self.warnings.append(ValidationIssue(field, message, "warning"))

    @property
    def messages(self) -> List[str]:
        return [f"[{err.field}] {err.message}" for err in self.errors]


def _is_score(value: Any) -> bool:
    # bool is an int subclass; JSON true is not a score
    return isinstance(value, int) and not isinstance(value, bool)


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def _check_score(result: ValidationResult, path: str, value: Any):
    if not _is_score(value):
        result.add_error(path, f"Score must be an integer, got {type(value).__name__}")
    elif value < 0 or value > 100:
        result.add_error(path, f"Score must be 0-100, got {value}")


def _check_minimum(result: ValidationResult, path: str, count: int, minimum: int,
                   noun: str, strict: bool):
    if count >= minimum:
        return
    message = f"Expected at least {minimum} {noun}, got {count}"
    if strict:
        result.add_error(path, message)
    else:
        result.add_warning(path, message)


def validate_audit_result(audit_data: Any, strict_minimums: Optional[bool] = None) -> ValidationResult:
    """
    Validate a parsed audit response from the generation service.

    Args:
        audit_data: The parsed JSON audit result
        strict_minimums: Treat the requested category/recommendation counts
            as hard rules. Defaults to STRICT_MINIMUMS.

    Returns:
        ValidationResult with errors and warnings
    """
    if strict_minimums is None:
        strict_minimums = STRICT_MINIMUMS
    result = ValidationResult(is_valid=True)

    if not isinstance(audit_data, dict):
        result.add_error('$', f"Expected a JSON object, got {type(audit_data).__name__}")
        return result

    for name in REQUIRED_FIELDS:
        if name not in audit_data:
            result.add_error(name, f"Missing required field: {name}")

    if not result.is_valid:
        return result

    overall_score = audit_data['overallScore']
    _check_score(result, 'overallScore', overall_score)

    # Category breakdown
    breakdown = audit_data['auditBreakdown']
    category_scores = []
    if not isinstance(breakdown, list):
        result.add_error('auditBreakdown', f"Must be a list, got {type(breakdown).__name__}")
    elif not breakdown:
        result.add_error('auditBreakdown', "Must contain at least one category")
    else:
        seen = set()
        for i, item in enumerate(breakdown):
            path = f'auditBreakdown[{i}]'
            if not isinstance(item, dict):
                result.add_error(path, f"Must be an object, got {type(item).__name__}")
                continue
            for key in ('category', 'comment'):
                if not _is_text(item.get(key)):
                    result.add_error(f'{path}.{key}', "Must be a non-empty string")
            _check_score(result, f'{path}.score', item.get('score'))
            if _is_score(item.get('score')):
                category_scores.append(item['score'])

            category = item.get('category')
            if _is_text(category):
                key = category.strip().lower()
                if key in seen:
                    result.add_warning(f'{path}.category', f"Duplicate category '{category}'")
                seen.add(key)

        _check_minimum(result, 'auditBreakdown', len(breakdown),
                       MIN_BREAKDOWN_CATEGORIES, "categories", strict_minimums)

    # Recommendations
    recommendations = audit_data['recommendations']
    if not isinstance(recommendations, list):
        result.add_error('recommendations', f"Must be a list, got {type(recommendations).__name__}")
    elif not recommendations:
        result.add_error('recommendations', "Must contain at least one recommendation")
    else:
        for i, item in enumerate(recommendations):
            path = f'recommendations[{i}]'
            if not isinstance(item, dict):
                result.add_error(path, f"Must be an object, got {type(item).__name__}")
                continue
            for key in ('title', 'description'):
                if not _is_text(item.get(key)):
                    result.add_error(f'{path}.{key}', "Must be a non-empty string")

        _check_minimum(result, 'recommendations', len(recommendations),
                       MIN_RECOMMENDATIONS, "recommendations", strict_minimums)

    # Overall score should roughly track the categories
    if _is_score(overall_score) and category_scores:
        mean = sum(category_scores) / len(category_scores)
        if abs(mean - overall_score) > SCORE_DRIFT_TOLERANCE:
            result.add_warning(
                'overallScore',
                f"Overall score ({overall_score}) is far from the category average ({mean:.0f})"
            )

    return result


def parse_audit_result(audit_data: Any, strict_minimums: Optional[bool] = None) -> AuditResult:
    """
    Turn a parsed response into an AuditResult, or fail without partial data.

    Raises:
        GenerationError: If any invariant of the response contract is broken
    """
    validation = validate_audit_result(audit_data, strict_minimums)
    for warning in validation.warnings:
        logger.warning("Audit response: [%s] %s", warning.field, warning.message)

    if not validation.is_valid:
        logger.warning("Audit response rejected: %s", "; ".join(validation.messages))
        raise GenerationError("Invalid data structure received from API.", issues=validation.messages)

    try:
        return AuditResult.model_validate(audit_data)
    except PydanticValidationError as e:
        issues = [f"[{'.'.join(str(p) for p in err['loc'])}] {err['msg']}" for err in e.errors()]
        raise GenerationError("Invalid data structure received from API.", issues=issues) from e
