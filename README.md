# implantwarranty

`implantwarranty` contains the business rules of a warranty registration system for implant products. A patient registers in three steps: the product serial numbers are verified, the patient fills in personal details, and the patient confirms the registration. This package covers those steps, along with product and serial number requests, warranty terms, encryption of sensitive patient fields, session tokens and input checks.

## Installation

```
pip install implantwarranty
```

To install the test tools as well:

```
pip install "implantwarranty[test]"
```

## Modules

| Module | Purpose |
| --- | --- |
| `implantwarranty.dates` | Dates without a time of day: `parse_date`, `format_date`, `add_days`, `add_months`, `add_years`, `today`, `yesterday`, `tomorrow` |
| `implantwarranty.timeutil` | `parse_taiwan_date_to_utc` reads `YYYY-MM-DD` or `YYYY-MM-DD HH:MM:SS` as Asia/Taipei time and returns it in UTC |
| `implantwarranty.passwords` | bcrypt hashing with `hash_password` and `check_password` |
| `implantwarranty.crypto` | AES-GCM with `encrypt_aes`, `decrypt_aes`, `encrypt_patient_id`, `decrypt_patient_id`, `encrypt_patient_phone`, `decrypt_patient_phone` and `parse_key`. Errors raise `CryptoError` |
| `implantwarranty.tokens` | HS256 tokens with `generate_jwt`, `validate_jwt`, `refresh_jwt` and `JWTClaims`. Errors raise `TokenError` |
| `implantwarranty.validation` | `decode_request` decodes a JSON body and normalises its date fields. Also provides `parse_flexible_date`, `process_date_fields`, `validation_message`, `FieldError`, `ValidationErrorResponse` and `RequestError` |
| `implantwarranty.textcheck` | `validate_email`, `validate_taiwan_phone`, `validate_password` and `sanitize_string` |
| `implantwarranty.identification` | Check-digit validation with `is_valid_taiwan_id`, `is_valid_passport_number` and `is_valid_identity`. Errors raise `IdentityError` |
| `implantwarranty.products` | `Product`, `ProductCreateRequest` and `ProductUpdateRequest`, plus `build_product`, `apply_update`, `validate_create_request`, `validate_warranty_years`, `metadata_kind` / `MetadataKind` and `page_summary` |
| `implantwarranty.serials` | Serial request checks, `normalize_pagination`, `total_pages`, `check_serial_format`, `generate_serial_key` and `partition_import_items` for bulk imports |
| `implantwarranty.warranty_terms` | `combine_warranty_years`, `representative_product`, `warranty_end_date`, `audit_values`, `check_batch_count` and `WarrantyProduct` |
| `implantwarranty.registration` | `WarrantyRegistration`, `RegistrationStep` and `WarrantyStatus`, with the step functions `apply_serials`, `apply_patient_info` and `confirm_registration`, plus `redact_for_patient`, `check_update_serials` and `refresh_expiry` |

## Examples

Encrypting a patient ID. The key is either 32 raw bytes of text or 64 hex characters:

```python
import os
from implantwarranty.crypto import encrypt_patient_id, decrypt_patient_id

key = os.urandom(32).hex()
sealed = encrypt_patient_id("A123456789", key)
assert decrypt_patient_id(sealed, key) == "A123456789"
```

Finding the warranty that two implants share. A term of `-1` means lifetime and `0` means no warranty. The shorter finite term wins:

```python
from datetime import date
from implantwarranty.warranty_terms import (
    WarrantyProduct, combine_warranty_years, warranty_end_date,
)

years = combine_warranty_years(WarrantyProduct(10), WarrantyProduct(-1))  # 10
end = warranty_end_date(date(2024, 3, 1), years)                          # date(2034, 3, 1)
```

Going through the patient registration steps. Each step returns an updated copy of the record:

```python
import os
from datetime import date
from implantwarranty.registration import (
    WarrantyRegistration, apply_serials, apply_patient_info, confirm_registration,
)

key = os.urandom(32).hex()
record = WarrantyRegistration(id="reg-1")
record = apply_serials(record, "0000000-001", "", date(2024, 3, 1), 10)
record = apply_patient_info(
    record, "王小明", "A123456789", date(1990, 1, 1), "0900000000",
    "patient@example.com", "Example Hospital", "Dr. Example", key,
)
record = confirm_registration(record)
```

Checking an identity number. A valid Taiwan ID is accepted first. Anything else must be a valid passport number:

```python
from implantwarranty.identification import is_valid_identity, IdentityError

try:
    is_valid_identity(value)
except IdentityError as err:
    print(err)
```

Issuing and checking a session token:

```python
from implantwarranty.tokens import generate_jwt, validate_jwt

secret = "secret"
token, expires = generate_jwt("user-1", "admin", "admin", secret, 24)
claims = validate_jwt(token, secret)
```

## Errors

Each module raises its own exception class: `CryptoError`, `TokenError`, `ProductError`, `SerialError`, `WarrantyError`, `IdentityError` and `RequestError`. Except for `TokenError` and `RequestError`, they are subclasses of `ValueError`. Their messages are the ones shown to users, and some of them are in Traditional Chinese.

## What the package does not do

The package has no storage, no web server, no command-line program and no e-mail sending. Looking up products, serial numbers and registrations, saving them, and writing audit records are left to the application that uses these functions. `audit_values` only produces the JSON text for an audit record.

## Running the tests

```
pytest
```