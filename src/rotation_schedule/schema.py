"""Input validation for credential records."""

from __future__ import annotations

from collections.abc import Iterable

from rotation_schedule.types import CredentialRecord


def validate_record(record: CredentialRecord, label: str) -> list[str]:
    """Validate one record. Returns list of error messages (empty = valid).

    Checks:
    - credential_id is a non-empty string
    - age_days is a non-negative integer
    """
    errors: list[str] = []

    cid = record.credential_id
    if not isinstance(cid, str):
        errors.append(f"{label}: credential identifier must be a string, got {cid!r}")
    elif not cid.strip():
        errors.append(f"{label}: empty credential identifier")

    age = record.age_days
    if isinstance(age, bool) or not isinstance(age, int):
        errors.append(
            f"{label}: age_days must be an integer, got {age!r}"
        )
    elif age < 0:
        errors.append(f"{label}: negative age_days {age}")

    return errors


def validate_records(records: Iterable[CredentialRecord]) -> list[str]:
    """Validate a sequence of records, labelling each by position."""
    errors: list[str] = []
    for i, record in enumerate(records):
        errors.extend(validate_record(record, f"credential {i}"))
    return errors


def validate_credentials(entries: object) -> list[str]:
    """Validate the raw JSON ``credentials`` list. Returns error messages.

    Checks:
    - entries is a list of objects
    - each object has "id" and "age_days"
    - values pass validate_record
    """
    if not isinstance(entries, list):
        return [f"'credentials' must be a list, got {type(entries).__name__}"]

    errors: list[str] = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            errors.append(f"credential {i}: expected object, got {entry!r}")
            continue

        missing = [k for k in ("id", "age_days") if k not in entry]
        if missing:
            errors.append(
                f"credential {i}: missing {', '.join(repr(k) for k in missing)}"
            )
            continue

        errors.extend(
            validate_record(
                CredentialRecord(entry["id"], entry["age_days"]),
                f"credential {i}",
            )
        )

    return errors
