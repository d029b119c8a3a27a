import pytest

from gbp_audit.errors import ValidationError
from gbp_audit.input_handler import BusinessInput, validate_audit_request, validate_business_input


def test_valid_input_is_cleaned(business_fields):
    business_fields["business_name"] = "  Joe's   Pizza "
    business = validate_business_input(business_fields)
    assert business.business_name == "Joe's Pizza"
    assert business.location == "Brooklyn, NY"
    assert business.phone_number == "555-0100"


def test_accepts_form_names():
    business = validate_business_input({
        "businessName": "Joe's Pizza",
        "location": "Brooklyn, NY",
        "email": "owner@joespizza.com",
        "phoneNumber": "555-0100",
    })
    assert business.business_name == "Joe's Pizza"


@pytest.mark.parametrize("field", ["business_name", "location", "email", "phone_number"])
def test_empty_field_rejected(business_fields, field):
    business_fields[field] = "   "
    with pytest.raises(ValidationError) as exc:
        validate_business_input(business_fields)
    assert len(exc.value.fields) == 1


def test_missing_fields_are_listed():
    with pytest.raises(ValidationError) as exc:
        validate_business_input({"location": "Brooklyn, NY"})
    assert exc.value.fields == ["businessName", "email", "phoneNumber"]


def test_malformed_email_rejected(business_fields):
    business_fields["email"] = "not-an-email"
    with pytest.raises(ValidationError) as exc:
        validate_business_input(business_fields)
    assert exc.value.fields == ["email"]


def test_phone_needs_digits(business_fields):
    business_fields["phone_number"] = "call us"
    with pytest.raises(ValidationError) as exc:
        validate_business_input(business_fields)
    assert exc.value.fields == ["phoneNumber"]


def test_validation_error_is_value_error(business_fields):
    business_fields["location"] = ""
    with pytest.raises(ValueError):
        validate_business_input(business_fields)


def test_audit_request_ignores_email():
    request = validate_audit_request({
        "businessName": "Joe's Pizza",
        "location": "Brooklyn, NY",
        "phoneNumber": "555-0100",
        "email": "not-an-email",
    })
    assert request.business_name == "Joe's Pizza"
    assert not isinstance(request, BusinessInput)


def test_audit_request_missing_fields_are_listed():
    with pytest.raises(ValidationError) as exc:
        validate_audit_request({"location": "Brooklyn, NY"})
    assert exc.value.fields == ["businessName", "phoneNumber"]
