"""
Mock/Test Data Generator for Logic Testing Mode.
Returns deterministic audit results without calling Groq.
"""
import logging
from typing import Mapping, Union

from .input_handler import AuditRequest, validate_audit_request
from .models import AuditResult
from .prompts import AUDIT_DIMENSIONS, email_opening
from .report import score_band
from .score_validator import parse_audit_result

logger = logging.getLogger(__name__)

_COMMENTS = {
    "poor": "Largely neglected; competitors are likely outranking this profile here.",
    "fair": "Some groundwork is in place but it is inconsistent.",
    "good": "Well maintained and in line with local best practice.",
}

MOCK_RECOMMENDATIONS = [
    {
        "title": "Ask Every Happy Customer for a Review",
        "description": "Send a short review link by text or email after each visit and reply to every review within 48 hours.",
    },
    {
        "title": "Post Weekly Updates",
        "description": "Publish one GBP post a week (offers, events, new work) with a clear call-to-action button.",
    },
    {
        "title": "Refresh Photos Monthly",
        "description": "Upload well-lit, high-resolution photos of the storefront, team and best-selling services every month.",
    },
    {
        "title": "Seed the Q&A Section",
        "description": "Add and answer the five questions customers ask most often so searchers get authoritative answers.",
    },
]


def generate_mock_audit(business_name: str) -> dict:
    """
    Generate a deterministic mock audit payload for testing.
    Uses the business name for consistent but varied scores.
    """
    # Create deterministic seed from business name
    seed = sum(ord(c) for c in business_name) % 100

    breakdown = []
    for i, (category, _) in enumerate(AUDIT_DIMENSIONS):
        score = 25 + (seed * (i + 3)) % 71  # Range: 25-95
        breakdown.append({
            "category": category,
            "score": score,
            "comment": _COMMENTS[score_band(score)],
        })

    overall_score = round(sum(item["score"] for item in breakdown) / len(breakdown))

    return {
        "overallScore": overall_score,
        "auditBreakdown": breakdown,
        "recommendations": [dict(rec) for rec in MOCK_RECOMMENDATIONS],
    }


def generate_mock_summary(result: AuditResult, business_name: str) -> str:
    """Plain-text email body laid out the way the summary prompt asks for."""
    lines = [
        email_opening(business_name),
        "",
        "This is an offline test summary generated without calling the AI model.",
        "",
        "OVERALL SCORE",
        f"{result.overall_score}/100",
        "",
        "KEY FINDINGS",
    ]
    lines += [f"- {item.category}: {item.score}/100" for item in result.audit_breakdown]
    lines += ["", "TOP RECOMMENDATIONS"]
    lines += [f"- {rec.title}" for rec in result.recommendations]
    lines += ["", "Small, steady improvements to the profile add up quickly."]
    return "\n".join(lines)


class MockAuditClient:
    """Drop-in replacement for GroqAuditClient that never touches the network."""

    async def request_audit(self, business: Union[AuditRequest, Mapping[str, str]]) -> AuditResult:
        if not isinstance(business, AuditRequest):
            business = validate_audit_request(dict(business))
        logger.info("TEST MODE: mock audit for %r", business.business_name)
        return parse_audit_result(generate_mock_audit(business.business_name))

    async def summarize(self, result: AuditResult, business_name: str) -> str:
        return generate_mock_summary(result, business_name)
