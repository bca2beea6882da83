"""
app/ingestion/csv_io.py — CSV import of leads and CSV export of scored results.

Upload format (header row required, case-insensitive):
    name,role,company,industry,location,linkedin_bio
"""

import io
import logging

import pandas as pd

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["name", "role", "company", "industry", "location", "linkedin_bio"]
REQUIRED_FIELDS = ["name", "role", "company", "industry", "location"]
EXPORT_COLUMNS = ["name", "role", "company", "industry", "location", "intent", "score", "reasoning"]


class CSVValidationError(ValueError):
    """The uploaded file is not a usable leads CSV."""


def parse_leads_csv(content: bytes) -> list[dict]:
    """
    Parse an uploaded leads CSV into a list of row dicts.

    Column names are lower-cased and trimmed, cell values are trimmed and
    empty cells become "". Only the known columns are kept.

    Raises:
        CSVValidationError: unreadable file, no rows, or missing columns.
    """
    if not content or not content.strip():
        raise CSVValidationError("CSV file is empty")

    try:
        df = pd.read_csv(io.BytesIO(content), dtype=str, keep_default_na=False, skip_blank_lines=True)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        logger.error("Error parsing CSV: %s", exc)
        raise CSVValidationError("Invalid CSV file format") from exc

    df.columns = [str(c).strip().lower() for c in df.columns]
    missing = [c for c in CSV_COLUMNS if c not in df.columns]
    if missing:
        raise CSVValidationError(f"Missing required columns: {', '.join(missing)}")

    if df.empty:
        raise CSVValidationError("CSV file is empty")

    df = df[CSV_COLUMNS].fillna("")
    for column in CSV_COLUMNS:
        df[column] = df[column].astype(str).str.strip()

    rows = df.to_dict(orient="records")

    logger.info("Parsed %d leads from CSV", len(rows))
    return rows


def validate_lead_row(row: dict) -> bool:
    """True if every required field is present and non-blank."""
    for field in REQUIRED_FIELDS:
        value = row.get(field)
        if not isinstance(value, str) or not value.strip():
            return False
    return True


def split_valid_rows(rows: list[dict]) -> tuple[list[dict], list[dict]]:
    """
    Separate usable rows from incomplete ones.

    Returns:
        (valid_rows, invalid) where each invalid entry is
        {"line": <1-based CSV line incl. header>, "lead": row}.
    """
    valid, invalid = [], []
    for index, row in enumerate(rows):
        if validate_lead_row(row):
            valid.append(row)
        else:
            invalid.append({"line": index + 2, "lead": row})
    return valid, invalid


def results_to_csv(rows: list[dict]) -> str:
    """Render scored rows (dicts with EXPORT_COLUMNS keys) as CSV text."""
    if not rows:
        return ""
    df = pd.DataFrame(rows).reindex(columns=EXPORT_COLUMNS).fillna("")
    stream = io.StringIO()
    df.to_csv(stream, index=False)
    return stream.getvalue()
