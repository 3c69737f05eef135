"""
patient registration

the registration form is looser than the Patient record: everything comes in
as text and the checks below decide whether it is good enough to store.

required: first name, last name, date of birth, gender, phone.
email is optional but has to look like an address when given.
phone has to look like a 10 digit north american number: 555-201-3344,
(555) 201-3344, 555.201.3344 and 5552013344 all pass.

a valid form becomes a PatientDraft: newly registered patients start under
observation, admitted today, with no room or physician assigned yet. the intake
details (address, emergency contact, blood type, allergies, medications,
insurance) are kept on the patient as entered.
"""

from __future__ import annotations

import datetime as dt
import re
from typing import Optional

from pydantic import field_validator

from wardview.core.errors import RegistrationError
from wardview.schemas.records import ContactInfo, PatientDraft, RecordModel
from wardview.schemas.status import PatientStatus

EMAIL_RE = re.compile(r"\S+@\S+\.\S+")
PHONE_RE = re.compile(r"^\(?([0-9]{3})\)?[-. ]?([0-9]{3})[-. ]?([0-9]{4})$")

INITIAL_STATUS = PatientStatus.observation


class RegistrationForm(RecordModel):
    first_name: str = ""
    last_name: str = ""
    date_of_birth: Optional[dt.date] = None
    gender: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    emergency_contact_name: str = ""
    emergency_contact_phone: str = ""
    blood_type: str = ""
    allergies: str = ""
    medications: str = ""
    # free text, one condition per line or comma separated
    medical_history: str = ""
    insurance_provider: str = ""

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def _blank_date(cls, value):
        # an untouched date input posts an empty string
        return value or None


def validate_registration(form: RegistrationForm) -> dict[str, str]:
    """Returns field -> message for every problem, empty when the form is fine."""
    errors: dict[str, str] = {}

    if not form.first_name.strip():
        errors["firstName"] = "First name is required"
    if not form.last_name.strip():
        errors["lastName"] = "Last name is required"
    if form.date_of_birth is None:
        errors["dateOfBirth"] = "Date of birth is required"
    if not form.gender:
        errors["gender"] = "Gender is required"

    if form.email and not EMAIL_RE.search(form.email):
        errors["email"] = "Please enter a valid email address"

    if not form.phone.strip():
        errors["phone"] = "Phone number is required"
    elif not PHONE_RE.match(form.phone):
        errors["phone"] = "Please enter a valid phone number"

    return errors


def split_history(text: str) -> list[str]:
    parts = re.split(r"[,\n]", text)
    return [p.strip() for p in parts if p.strip()]


def to_patient_draft(form: RegistrationForm, today: Optional[dt.date] = None) -> PatientDraft:
    """Validates the form and turns it into a draft, raising RegistrationError on bad input."""
    errors = validate_registration(form)
    if errors:
        raise RegistrationError(errors)

    return PatientDraft(
        first_name=form.first_name.strip(),
        last_name=form.last_name.strip(),
        date_of_birth=form.date_of_birth,
        gender=form.gender,
        current_status=INITIAL_STATUS.value,
        admission_date=today or dt.date.today(),
        medical_history=split_history(form.medical_history),
        contact_info=ContactInfo(phone=form.phone.strip(), email=form.email.strip()),
        address=form.address.strip(),
        emergency_contact_name=form.emergency_contact_name.strip(),
        emergency_contact_phone=form.emergency_contact_phone.strip(),
        blood_type=form.blood_type,
        allergies=form.allergies.strip(),
        medications=form.medications.strip(),
        insurance_provider=form.insurance_provider.strip(),
    )
