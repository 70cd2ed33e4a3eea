import re
from typing import Any, List

_SEPARATOR_RE = re.compile(r" *[,\t] *| +")


def normalize(name: Any) -> str:
    if not isinstance(name, str):
        return ""
    return name.strip().lower()


def separate_values(line: str) -> List[str]:
    """Split a CSV, TSV or space separated line into its fields.

    Commas and tabs delimit one field each, so an empty column in a
    spreadsheet export stays an empty field. Runs of spaces count as a
    single separator.
    """
    stripped = line.strip()
    if not stripped:
        return []
    return [field.strip() for field in _SEPARATOR_RE.split(stripped)]
