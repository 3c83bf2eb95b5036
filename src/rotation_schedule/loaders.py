"""Data loading utilities for credential age listings."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from rotation_schedule.schema import validate_credentials
from rotation_schedule.types import CredentialRecord, CredentialValidationError

logger = logging.getLogger(__name__)


def parse_lines(
    lines: Iterable[str],
    source: str | None = None,
) -> list[CredentialRecord]:
    """Parse ``<age_days> <identifier>`` lines into records.

    The identifier is everything after the first run of whitespace, so paths
    containing spaces survive. Blank lines and ``#`` comments are skipped.

    Raises CredentialValidationError listing every malformed line, or naming
    the undecodable byte when ``lines`` is a text stream over non-UTF-8 data.
    """
    records: list[CredentialRecord] = []
    errors: list[str] = []

    try:
        for lineno, raw in enumerate(lines, start=1):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue

            parts = line.split(None, 1)
            if len(parts) != 2:
                errors.append(f"line {lineno}: expected '<age_days> <identifier>'")
                continue

            age_str, credential_id = parts
            try:
                age_days = int(age_str)
            except ValueError:
                errors.append(f"line {lineno}: age {age_str!r} is not an integer")
                continue
            if age_days < 0:
                errors.append(f"line {lineno}: negative age {age_days}")
                continue

            records.append(
                CredentialRecord(credential_id=credential_id, age_days=age_days)
            )
    except UnicodeDecodeError as e:
        # decoding happens while iterating a text stream
        raise CredentialValidationError(
            [f"input is not valid UTF-8: {e.reason} at byte {e.start}"],
            source=source,
        ) from None

    if errors:
        raise CredentialValidationError(errors, source=source)

    logger.debug("Read %d credential(s) from %s", len(records), source or "input")
    return records


def load_credentials_text(path: str | Path) -> list[CredentialRecord]:
    """Load records from a whitespace-separated text listing."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        return parse_lines(f, source=path.name)


def load_credentials_json(path: str | Path) -> list[CredentialRecord]:
    """Load records from a JSON file.

    The JSON file must have the format:
    {
        "credentials": [
            {"id": "mail/work.gpg", "age_days": 120},
            ...
        ]
    }

    Raises CredentialValidationError if validation fails.
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except UnicodeDecodeError as e:
            raise CredentialValidationError(
                [f"input is not valid UTF-8: {e.reason} at byte {e.start}"],
                source=path.name,
            ) from None

    if not isinstance(data, dict):
        raise CredentialValidationError(
            [f"top level must be an object, got {type(data).__name__}"],
            source=path.name,
        )
    entries = data.get("credentials", [])

    errors = validate_credentials(entries)
    if errors:
        raise CredentialValidationError(errors, source=path.name)

    records = [
        CredentialRecord(credential_id=e["id"], age_days=e["age_days"])
        for e in entries
    ]
    logger.debug("Read %d credential(s) from %s", len(records), path.name)
    return records


def load_credentials(path: str | Path) -> list[CredentialRecord]:
    """Load records, choosing JSON or text by file suffix."""
    path = Path(path)
    if path.suffix.lower() == ".json":
        return load_credentials_json(path)
    return load_credentials_text(path)
