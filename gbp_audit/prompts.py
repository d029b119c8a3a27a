"""
Prompt templates and the response schema sent to the generation service.
"""
import json

SYSTEM_PROMPT = """You are a world-class Google Business Profile (GBP) optimization expert.
You cannot access the live internet. Every audit you write is a plausible, hypothetical
assessment based only on the details provided. Return ONLY valid JSON. No commentary. No markdown."""

# (title, what to look at) in the order they are presented to the model
AUDIT_DIMENSIONS = [
    (
        "Profile Completeness & Accuracy",
        "Check for consistent NAP (Name, Address, Phone), filled-out service areas, "
        "attributes, and a compelling business description.",
    ),
    (
        "Review Strategy & Responsiveness",
        "Evaluate the quantity and quality of reviews. Crucially, analyze the hypothetical "
        "responsiveness to both positive and negative reviews. A good response is timely, "
        "professional, and personalized. A bad response is generic, slow, or non-existent.",
    ),
    (
        "Photo & Video Strategy",
        "Assess the quality (high-resolution, well-lit, professional) and quantity of photos "
        "and videos. For a restaurant, this would mean appetizing food photos; for a law firm, "
        "professional headshots and office photos.",
    ),
    (
        "Post Frequency & Engagement",
        "Analyze the consistency and relevance of GBP posts (updates, offers, events). "
        "Are they engaging? Do they have clear calls-to-action?",
    ),
    (
        "Q&A Engagement",
        "Evaluate how well the business manages its Q&A section. Does it proactively add "
        "common questions and provide authoritative answers? Does it answer user questions promptly?",
    ),
    (
        "Local SEO Signals",
        "Evaluate hypothetical local citations, backlink profile from relevant local sites, "
        "and keyword optimization in the business description and posts.",
    ),
    (
        "Service/Product Listing Optimization",
        "Assess how well services and products are listed, described, and priced. "
        "Are they using high-quality images for each?",
    ),
]

MIN_BREAKDOWN_CATEGORIES = 6
MIN_RECOMMENDATIONS = 4

AUDIT_RESPONSE_SCHEMA = {
    "type": "object",
    "properties": {
        "overallScore": {
            "type": "integer",
            "minimum": 0,
            "maximum": 100,
            "description": "A score from 0 to 100 representing the overall health of the Google Business Profile.",
        },
        "auditBreakdown": {
            "type": "array",
            "minItems": MIN_BREAKDOWN_CATEGORIES,
            "items": {
                "type": "object",
                "properties": {
                    "category": {
                        "type": "string",
                        "description": "The category being audited (e.g., 'Profile Completeness', 'Review Management').",
                    },
                    "score": {
                        "type": "integer",
                        "minimum": 0,
                        "maximum": 100,
                        "description": "Score for this category (0-100).",
                    },
                    "comment": {
                        "type": "string",
                        "description": "A brief comment on this category's performance.",
                    },
                },
                "required": ["category", "score", "comment"],
                "additionalProperties": False,
            },
        },
        "recommendations": {
            "type": "array",
            "minItems": MIN_RECOMMENDATIONS,
            "items": {
                "type": "object",
                "properties": {
                    "title": {
                        "type": "string",
                        "description": "A short, catchy title for the recommendation.",
                    },
                    "description": {
                        "type": "string",
                        "description": "A detailed explanation of the suggested improvement.",
                    },
                },
                "required": ["title", "description"],
                "additionalProperties": False,
            },
        },
    },
    "required": ["overallScore", "auditBreakdown", "recommendations"],
    "additionalProperties": False,
}


def build_audit_prompt(business_name: str, location: str, phone_number: str) -> str:
    """Audit instructions for one business. Same input, same text."""
    dimensions = "\n".join(
        f"{i}.  **{title}:** {detail}"
        for i, (title, detail) in enumerate(AUDIT_DIMENSIONS, 1)
    )
    return f"""Generate a plausible, highly detailed, and hypothetical audit for a business with the following details:
- Business Name: "{business_name}"
- Location: "{location}"
- Phone Number: "{phone_number}"

Infer the business's industry from its name (e.g., restaurant, law firm, retail shop). Your audit MUST reflect the nuances of that specific industry.

Perform a detailed audit covering these key areas:
{dimensions}

Your response MUST be a valid JSON object that adheres to the provided schema. Do not include any text outside of the JSON object.

The analysis must include:
1.  An overall score from 0 to 100.
2.  A breakdown of scores for at least {MIN_BREAKDOWN_CATEGORIES} of the categories listed above.
3.  At least {MIN_RECOMMENDATIONS} specific, actionable recommendations for improvement. These should be insightful and tailored to the hypothetical findings.
"""


def email_opening(business_name: str) -> str:
    return f"Here is the summary of your Google Business Profile audit for {business_name}:"


def build_email_prompt(result, business_name: str) -> str:
    """Instructions for a plain-text email summarizing ``result`` (an AuditResult)."""
    payload = result.to_payload()
    breakdown = json.dumps(payload["auditBreakdown"], ensure_ascii=False)
    recommendations = json.dumps(payload["recommendations"], ensure_ascii=False)
    return f"""Summarize the following Google Business Profile audit for "{business_name}" into a concise and professional email body suitable for sharing with a team or stakeholder.
The tone should be informative and encouraging.
Format it with clear headings using block capitals (e.g., "OVERALL SCORE") and use bullet points for lists. Do not use markdown. Use plain text with line breaks for maximum compatibility.

Audit Data:
- Overall Score: {payload["overallScore"]}/100
- Breakdown: {breakdown}
- Recommendations: {recommendations}

Start the email body directly with "{email_opening(business_name)}".
Follow this structure:
1. A brief introduction.
2. A section titled "OVERALL SCORE".
3. A section titled "KEY FINDINGS" that lists each audit category and its score as a bullet point (e.g., "- Profile Completeness: 85/100").
4. A section titled "TOP RECOMMENDATIONS" that lists the title of each recommendation as a bullet point.
5. A concluding sentence.
"""
