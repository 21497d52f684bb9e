"""Column matching for guest list spreadsheets.

Spreadsheet rows arrive as dicts keyed by the header text. Headers are
matched loosely, ignoring case and accents, in Portuguese or English.
The same normalisation drives the name search of guest and staff lists.
"""

import re
import unicodedata
from typing import Any, Iterable

NAME_COLUMN = re.compile(r"(nome|name|participante|convidado|fullname)")
COMPANY_COLUMN = re.compile(r"(empresa|company|organizacao|instituicao|org)")
ROLE_COLUMN = re.compile(r"(cargo|role|funcao|ocupacao)")


def normalize_header(header: Any) -> str:
    """Lowercase a header and strip accents and surrounding spaces."""
    text = unicodedata.normalize("NFKD", str(header).strip().lower())
    return "".join(char for char in text if not unicodedata.combining(char))


def matches_search(query: str | None, *values: str | None) -> bool:
    """Whether any of ``values`` contains ``query``, ignoring case and accents.

    A blank query matches everything.
    """
    needle = normalize_header(query or "")
    if not needle:
        return True
    return any(needle in normalize_header(value) for value in values if value)


def find_column(headers: Iterable[Any], pattern: re.Pattern) -> Any | None:
    """Return the first header matching ``pattern``, or None."""
    for header in headers:
        if pattern.search(normalize_header(header)):
            return header
    return None


def _cell(row: dict[str, Any], column: Any | None) -> str | None:
    if column is None:
        return None
    value = row.get(column)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def extract_guests(rows: list[dict[str, Any]]) -> list[dict[str, str | None]]:
    """Turn spreadsheet rows into guest values.

    Columns are detected from the keys of all rows. Rows without a name are
    skipped.

    Returns:
        One ``{"name", "company", "role"}`` dict per usable row.
    """
    headers: list[Any] = []
    for row in rows:
        headers.extend(key for key in row if key not in headers)

    name_column = find_column(headers, NAME_COLUMN)
    if name_column is None:
        return []
    company_column = find_column(headers, COMPANY_COLUMN)
    role_column = find_column(headers, ROLE_COLUMN)

    guests = []
    for row in rows:
        name = _cell(row, name_column)
        if name is None:
            continue
        guests.append(
            {
                "name": name,
                "company": _cell(row, company_column),
                "role": _cell(row, role_column),
            }
        )
    return guests
