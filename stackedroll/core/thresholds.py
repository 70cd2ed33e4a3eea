import math
from dataclasses import dataclass
from numbers import Real
from typing import Any, Optional

ROLL_BAND = 100


@dataclass(frozen=True)
class PointsParse:
    value: Optional[int] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.value is not None


def _to_number(raw: Any) -> Optional[Real]:
    if isinstance(raw, bool) or raw is None:
        return None
    if isinstance(raw, Real):
        return raw
    if not isinstance(raw, str):
        return None

    text = raw.strip()
    if not text:
        return None
    for convert in (int, float):
        try:
            return convert(text)
        except ValueError:
            pass

    # Hexadecimal literals, e.g. "0x1f"
    if not text.lower().lstrip("-").startswith("0x"):
        return None
    try:
        return int(text, 16)
    except ValueError:
        return None


def parse_points(raw: Any) -> PointsParse:
    """Coerce a raw value into a point balance.

    Integers are kept exact, other numbers are floored, and negative values
    are clamped to zero. Anything that is not a finite number yields a failed
    parse carrying the reason.
    """
    number = _to_number(raw)
    if number is None:
        return PointsParse(reason=f"Not a number: {raw!r}")
    if isinstance(number, int):
        return PointsParse(value=max(0, number))
    if isinstance(number, float) and not math.isfinite(number):
        return PointsParse(reason=f"Not a finite number: {raw!r}")
    try:
        value = math.floor(number)
    except (OverflowError, ValueError):
        return PointsParse(reason=f"Not a finite number: {raw!r}")
    return PointsParse(value=max(0, int(value)))


def to_points(raw: Any) -> Optional[int]:
    return parse_points(raw).value


def roll_points(points: int, reserve_threshold: int) -> int:
    return min(reserve_threshold, points)


def reserve(points: int, reserve_threshold: int) -> int:
    return max(0, points - reserve_threshold)


def max_stacked_roll(points: int, reserve_threshold: int) -> int:
    return max(1, min(reserve_threshold, points))


def min_stacked_roll(points: int, reserve_threshold: int) -> int:
    return max(1, max_stacked_roll(points, reserve_threshold) - ROLL_BAND)


def is_stacked_roll(low: int, high: int, reserve_threshold: int) -> bool:
    if max_stacked_roll(high, reserve_threshold) != high or high > reserve_threshold:
        return False
    return min_stacked_roll(high, reserve_threshold) == low


class ThresholdCalculator:
    def __init__(self, reserve_threshold: int) -> None:
        self.reserve_threshold = max(0, int(reserve_threshold))

    def roll_points(self, points: int) -> int:
        return roll_points(points, self.reserve_threshold)

    def reserve(self, points: int) -> int:
        return reserve(points, self.reserve_threshold)

    def max_stacked_roll(self, points: int) -> int:
        return max_stacked_roll(points, self.reserve_threshold)

    def min_stacked_roll(self, points: int) -> int:
        return min_stacked_roll(points, self.reserve_threshold)

    def is_stacked_roll(self, low: int, high: int) -> bool:
        return is_stacked_roll(low, high, self.reserve_threshold)
