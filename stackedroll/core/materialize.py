from dataclasses import dataclass, field
from typing import Dict, List, Mapping

from .names import normalize
from .thresholds import to_points


@dataclass
class PlayerRecord:
    name: str
    points: int
    aliases: List[str] = field(default_factory=list)
    player_class: str = ""


@dataclass
class MaterializedView:
    details: Dict[str, PlayerRecord] = field(default_factory=dict)
    alias_index: Dict[str, str] = field(default_factory=dict)


def materialize(points: Mapping, aliases: Mapping) -> MaterializedView:
    """Build the alias-resolved lookup from the raw stored points and aliases.

    Always a full rebuild: aliases may reference players stored before or
    after them.
    """
    details: Dict[str, PlayerRecord] = {}
    alias_index: Dict[str, str] = {}

    for name, raw_points in points.items():
        name = normalize(name)
        if not name or name in details:
            continue
        value = to_points(raw_points)
        details[name] = PlayerRecord(name=name, points=value if value is not None else 0)

    for alias, main in aliases.items():
        alias = normalize(alias)
        main = normalize(main)
        if not alias or not main:
            continue
        if main not in details or alias in details or alias in alias_index:
            continue
        details[main].aliases.append(alias)
        alias_index[alias] = main

    return MaterializedView(details=details, alias_index=alias_index)
