"""Patient self-registration steps and administrative checks on warranty records."""

from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass
from datetime import date, datetime, time, timezone

from implantwarranty.crypto import encrypt_patient_id, encrypt_patient_phone
from implantwarranty.serials import check_serial_format
from implantwarranty.textcheck import sanitize_string
from implantwarranty.warranty_terms import (
    WARRANTY_YEARS_NO_WARRANTY,
    WarrantyError,
    warranty_end_date,
)


class RegistrationStep(enum.IntEnum):
    """How far a patient has got in filling in a warranty registration."""

    BLANK = 0
    SERIAL_VERIFIED = 1
    PATIENT_INFO_FILLED = 2
    WARRANTY_ESTABLISHED = 3
    VERIFIED_WITHOUT_WARRANTY = 4


class WarrantyStatus(str, enum.Enum):
    """State of an established warranty."""

    ACTIVE = "active"
    EXPIRED = "expired"


@dataclass
class WarrantyRegistration:
    """A warranty registration record; None means the field is not set."""

    id: str
    step: RegistrationStep = RegistrationStep.BLANK
    status: WarrantyStatus | None = None
    patient_name: str | None = None
    patient_id: str | None = None
    patient_id_encrypted: str | None = None
    patient_birth_date: datetime | None = None
    patient_phone: str | None = None
    patient_phone_encrypted: str | None = None
    patient_email: str | None = None
    hospital_name: str | None = None
    doctor_name: str | None = None
    surgery_date: datetime | None = None
    warranty_start_date: datetime | None = None
    warranty_end_date: datetime | None = None
    product_serial_number: str | None = None
    product_serial_number2: str | None = None
    email_sent: bool = False
    updated_at: datetime | None = None


_FILLABLE_STEPS = (RegistrationStep.SERIAL_VERIFIED, RegistrationStep.PATIENT_INFO_FILLED)


def _as_utc(moment: datetime | date) -> datetime:
    if not isinstance(moment, datetime):
        return datetime.combine(moment, time(), timezone.utc)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def _now() -> datetime:
    return datetime.now(timezone.utc)


def apply_serials(
    warranty: WarrantyRegistration,
    serial_number: str,
    serial_number2: str,
    surgery_date: datetime | date,
    years: int,
) -> WarrantyRegistration:
    """First patient step: record serial numbers, surgery date and warranty period.

    ``years`` is the combined term of the products behind the serial numbers.
    Returns an updated copy; the given record is left untouched.
    """
    if warranty.step != RegistrationStep.BLANK:
        raise WarrantyError("warranty has already been filled")
    check_serial_format(serial_number)
    if serial_number2:
        if serial_number2 == serial_number:
            raise WarrantyError("two serial numbers cannot be the same")
        check_serial_format(serial_number2)

    surgery = _as_utc(surgery_date)
    if surgery > _now():
        raise WarrantyError("surgery date cannot be in the future")

    step = RegistrationStep.SERIAL_VERIFIED
    if years == WARRANTY_YEARS_NO_WARRANTY:
        step = RegistrationStep.VERIFIED_WITHOUT_WARRANTY

    changes: dict[str, object] = {
        "warranty_start_date": surgery,
        "warranty_end_date": warranty_end_date(surgery, years),
        "step": step,
        "surgery_date": surgery,
        "product_serial_number": sanitize_string(serial_number),
    }
    if serial_number2:
        changes["product_serial_number2"] = sanitize_string(serial_number2)
    return dataclasses.replace(warranty, **changes)


def apply_patient_info(
    warranty: WarrantyRegistration,
    name: str,
    patient_id: str,
    birth_date: datetime | date,
    phone: str,
    email: str,
    hospital: str,
    doctor: str,
    encryption_key: str,
) -> WarrantyRegistration:
    """Second patient step: store personal details, encrypting the ID and phone number."""
    if warranty.step not in _FILLABLE_STEPS:
        raise WarrantyError("warranty can not be filled")
    encrypted_id = encrypt_patient_id(patient_id, encryption_key)
    encrypted_phone = encrypt_patient_phone(phone, encryption_key)
    return dataclasses.replace(
        warranty,
        patient_name=sanitize_string(name),
        patient_id_encrypted=encrypted_id,
        patient_birth_date=_as_utc(birth_date),
        patient_phone_encrypted=encrypted_phone,
        patient_email=sanitize_string(email),
        hospital_name=sanitize_string(hospital),
        doctor_name=sanitize_string(doctor),
        step=RegistrationStep.PATIENT_INFO_FILLED,
    )


def confirm_registration(warranty: WarrantyRegistration) -> WarrantyRegistration:
    """Final patient step: establish the warranty and make it active."""
    if warranty.step != RegistrationStep.PATIENT_INFO_FILLED:
        raise WarrantyError("warranty can not be confirmed")
    return dataclasses.replace(
        warranty,
        step=RegistrationStep.WARRANTY_ESTABLISHED,
        status=WarrantyStatus.ACTIVE,
    )


def redact_for_patient(warranty: WarrantyRegistration) -> WarrantyRegistration:
    """Copy of an in-progress registration with identity and phone data blanked out."""
    if warranty.step not in _FILLABLE_STEPS:
        raise WarrantyError("warranty can not be filled")
    return dataclasses.replace(
        warranty,
        patient_id_encrypted="",
        patient_phone_encrypted="",
        patient_id="",
        patient_phone="",
    )


def check_update_serials(
    old: WarrantyRegistration, serial_number: str, serial_number2: str
) -> tuple[str, ...]:
    """Check serial numbers of an administrative update.

    Returns the serial numbers not already on this registration; they have a
    valid format and still have to be confirmed as registered and unused.
    """
    if serial_number == "":
        raise WarrantyError("產品序號1是必填的")
    current = {old.product_serial_number or "", old.product_serial_number2 or ""}
    current.discard("")
    new: list[str] = []
    if serial_number not in current:
        check_serial_format(serial_number)
        new.append(serial_number)
    if serial_number2:
        if serial_number2 == serial_number:
            raise WarrantyError("產品序號2不能與產品序號1相同")
        if serial_number2 not in current:
            check_serial_format(serial_number2)
            new.append(serial_number2)
    return tuple(new)


def refresh_expiry(warranty: WarrantyRegistration, now: datetime | date) -> WarrantyRegistration:
    """Mark the warranty expired when its end date lies before ``now``."""
    end = warranty.warranty_end_date
    if end is not None and _as_utc(end) < _as_utc(now):
        return dataclasses.replace(warranty, status=WarrantyStatus.EXPIRED)
    return dataclasses.replace(warranty)