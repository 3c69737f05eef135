"""Tests for patient registration validation."""
import datetime as dt

import pytest

from wardview.core.errors import RegistrationError
from wardview.services.registration import RegistrationForm, to_patient_draft, validate_registration


def _form(**overrides) -> RegistrationForm:
    data = {
        "firstName": "Tomas",
        "lastName": "Berg",
        "dateOfBirth": "1994-02-11",
        "gender": "male",
        "phone": "555-867-5309",
        "email": "tomas.berg@example.com",
        "medicalHistory": "Asthma, Hay fever\nPenicillin allergy",
    }
    data.update(overrides)
    return RegistrationForm.model_validate(data)


def test_valid_form_has_no_errors():
    assert validate_registration(_form()) == {}


def test_required_fields():
    errors = validate_registration(
        _form(firstName=" ", lastName="", dateOfBirth="", gender="", phone="")
    )
    assert errors == {
        "firstName": "First name is required",
        "lastName": "Last name is required",
        "dateOfBirth": "Date of birth is required",
        "gender": "Gender is required",
        "phone": "Phone number is required",
    }


@pytest.mark.parametrize("email", ["nope", "a@b", "@example.com"])
def test_bad_email(email):
    assert validate_registration(_form(email=email))["email"] == "Please enter a valid email address"


def test_email_is_optional():
    assert validate_registration(_form(email="")) == {}


@pytest.mark.parametrize("phone", ["(555) 867-5309", "555.867.5309", "5558675309", "555 867 5309"])
def test_phone_formats_accepted(phone):
    assert validate_registration(_form(phone=phone)) == {}


@pytest.mark.parametrize("phone", ["867-5309", "555-867-530", "phone"])
def test_bad_phone(phone):
    assert validate_registration(_form(phone=phone))["phone"] == "Please enter a valid phone number"


def test_draft_from_valid_form():
    draft = to_patient_draft(_form(), today=dt.date(2024, 3, 8))

    assert draft.first_name == "Tomas"
    assert draft.date_of_birth == dt.date(1994, 2, 11)
    assert draft.current_status == "observation"
    assert draft.admission_date == dt.date(2024, 3, 8)
    assert draft.medical_history == ["Asthma", "Hay fever", "Penicillin allergy"]
    assert draft.contact_info.phone == "555-867-5309"


def test_draft_from_invalid_form_raises():
    with pytest.raises(RegistrationError) as excinfo:
        to_patient_draft(_form(lastName=""))
    assert excinfo.value.errors == {"lastName": "Last name is required"}


def test_draft_keeps_intake_details():
    form = _form(
        address="12 Harbor Lane",
        emergencyContactName="Lena Berg",
        emergencyContactPhone="555-867-1200",
        bloodType="O+",
        allergies="Penicillin",
        medications="Salbutamol inhaler",
        insuranceProvider="Northwind Health",
    )
    draft = to_patient_draft(form, today=dt.date(2024, 3, 8))

    assert draft.address == "12 Harbor Lane"
    assert draft.emergency_contact_name == "Lena Berg"
    assert draft.emergency_contact_phone == "555-867-1200"
    assert draft.blood_type == "O+"
    assert draft.allergies == "Penicillin"
    assert draft.medications == "Salbutamol inhaler"
    assert draft.insurance_provider == "Northwind Health"
