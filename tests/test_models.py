from datetime import datetime, timezone

import pytest
from pydantic import ValidationError as PydanticValidationError

from gbp_audit.input_handler import validate_business_input
from gbp_audit.models import AuditBreakdownItem, AuditEntry, AuditResult, DraftForm


@pytest.mark.parametrize("score", [0, 100])
def test_boundary_scores_are_valid(make_payload, score):
    payload = make_payload(overall=score, score=score)
    result = AuditResult.model_validate(payload)
    assert result.overall_score == score
    assert all(item.score == score for item in result.audit_breakdown)


@pytest.mark.parametrize("score", [-1, 101])
def test_out_of_range_overall_score_rejected(make_payload, score):
    with pytest.raises(PydanticValidationError):
        AuditResult.model_validate(make_payload(overall=score))


@pytest.mark.parametrize("score", [-1, 101])
def test_out_of_range_category_score_rejected(score):
    with pytest.raises(PydanticValidationError):
        AuditBreakdownItem(category="Q&A Engagement", score=score, comment="Unanswered questions")


@pytest.mark.parametrize("score", ["80", 80.0, True])
def test_scores_must_be_real_integers(score):
    with pytest.raises(PydanticValidationError):
        AuditBreakdownItem(category="Local SEO Signals", score=score, comment="Few citations")


def test_empty_sequences_rejected(make_payload):
    with pytest.raises(PydanticValidationError):
        AuditResult.model_validate(make_payload(categories=0))
    with pytest.raises(PydanticValidationError):
        AuditResult.model_validate(make_payload(recommendations=0))


def test_blank_strings_rejected():
    with pytest.raises(PydanticValidationError):
        AuditBreakdownItem(category="   ", score=50, comment="ok")


def test_result_is_frozen(make_payload):
    result = AuditResult.model_validate(make_payload())
    with pytest.raises(PydanticValidationError):
        result.overall_score = 10


def test_result_round_trips_to_wire_names(make_payload):
    payload = make_payload()
    assert AuditResult.model_validate(payload).to_payload() == payload


def test_entry_from_input(business_fields):
    business = validate_business_input(business_fields)
    when = datetime(2026, 10, 19, 15, 30, tzinfo=timezone.utc)

    entry = AuditEntry.from_input(business, when)

    assert entry.to_payload() == {
        "email": "owner@joespizza.com",
        "businessName": "Joe's Pizza",
        "location": "Brooklyn, NY",
        "phoneNumber": "555-0100",
        "timestamp": "2026-10-19T15:30:00Z",
    }


def test_entry_without_phone_and_naive_timestamp():
    entry = AuditEntry.model_validate({
        "email": "a@b.co",
        "businessName": "Corner Deli",
        "location": "Queens, NY",
        "timestamp": "2025-01-02T03:04:05",
    })
    assert entry.phone_number is None
    assert entry.timestamp.tzinfo == timezone.utc
    assert "phoneNumber" not in entry.to_payload()


def test_draft_completeness():
    draft = DraftForm(businessName="Joe's Pizza", location="Brooklyn, NY", email="x@y.com")
    assert not draft.is_complete()
    draft.phone_number = "555-0100"
    assert draft.is_complete()
    assert draft.as_input_data()["business_name"] == "Joe's Pizza"
