import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .names import normalize, separate_values
from .thresholds import parse_points

EMPTY_INPUT_MESSAGE = "Invalid stacked roll data provided"
NO_VALID_ROWS_MESSAGE = (
    "Invalid data provided. Make sure that the contents follows the required "
    "format and no header row is included."
)


class StackedRollImportError(ValueError):
    pass


class EmptyInputError(StackedRollImportError):
    def __init__(self) -> None:
        super().__init__(EMPTY_INPUT_MESSAGE)


class NoValidRowsError(StackedRollImportError):
    def __init__(self) -> None:
        super().__init__(NO_VALID_ROWS_MESSAGE)


@dataclass
class ImportMetadata:
    imported_at: int
    import_string: str


@dataclass
class ImportResult:
    points: Dict[str, int]
    aliases: Dict[str, str]
    metadata: ImportMetadata
    skipped_lines: List[int] = field(default_factory=list)


def parse_import(raw_text: str, now: Optional[int] = None) -> ImportResult:
    """Parse pasted stacked roll data.

    Every line reads ``PlayerName,Points,Alias1,Alias2...`` where the fields
    are separated by commas, tabs or spaces, e.g. ``Foobar,240,Barfoo``.
    The first valid line for a player wins, as does the first claim on an
    alias. Raises EmptyInputError or NoValidRowsError when nothing usable
    was supplied.
    """
    if not isinstance(raw_text, str) or not raw_text.strip():
        raise EmptyInputError()

    points: Dict[str, int] = {}
    aliases: Dict[str, str] = {}
    skipped_lines: List[int] = []

    for index, line in enumerate(raw_text.split("\n"), start=1):
        segments = separate_values(line)
        if not segments:
            continue

        player_name = normalize(segments[0])
        parsed = parse_points(segments[1]) if len(segments) > 1 else None

        if not player_name or player_name in points or parsed is None or not parsed.ok:
            logging.debug("Skipping stacked roll line %s: %r", index, line)
            skipped_lines.append(index)
            continue

        points[player_name] = parsed.value

        for raw_alias in segments[2:]:
            alias = normalize(raw_alias)
            if alias and alias not in points and alias not in aliases:
                aliases[alias] = player_name

    if not points:
        raise NoValidRowsError()

    # A player listed further down may have been claimed as an alias earlier on
    aliases = {alias: main for alias, main in aliases.items() if alias not in points}

    return ImportResult(
        points=points,
        aliases=aliases,
        metadata=ImportMetadata(
            imported_at=int(time.time()) if now is None else int(now),
            import_string=raw_text,
        ),
        skipped_lines=skipped_lines,
    )
