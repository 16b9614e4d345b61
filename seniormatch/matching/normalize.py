from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

_WS = re.compile(r"\s+")
_DIGITS = re.compile(r"\d+")

METRO_PREFIXES: tuple[str, ...] = ("부산", "울산", "경남")

# District stems that name exactly one metro area. Shared names (중구, 남구, 동구, ...) are left out.
METRO_DISTRICTS: dict[str, tuple[str, ...]] = {
    "부산": ("해운대", "부산진", "동래", "영도", "사하", "금정", "연제", "수영", "사상", "기장"),
    "울산": ("울주",),
    "경남": ("창원", "진주", "통영", "사천", "김해", "밀양", "거제", "양산", "의령", "함안", "창녕", "남해", "하동", "산청", "함양", "거창", "합천"),
}

HOURLY_THRESHOLD = 100_000
HOURLY_TO_MONTHLY = 160  # ~20h/week * 4 weeks
MAN_WON = 10_000
_MAN_UNIT = re.compile(r"\d\s*만")


def normalize(text: Optional[str]) -> str:
    return _WS.sub("", text or "").lower()


def metro_area(region: Optional[str]) -> Optional[str]:
    norm = normalize(region)
    for prefix in METRO_PREFIXES:
        if norm.startswith(prefix):
            return prefix
    for prefix, districts in METRO_DISTRICTS.items():
        if any(norm.startswith(d) for d in districts):
            return prefix
    return None


def is_close_region(item_region: Optional[str], target_region: Optional[str]) -> bool:
    item = normalize(item_region)
    target = normalize(target_region)
    if item in target or target in item:
        return True
    item_metro = metro_area(item)
    return item_metro is not None and item_metro == metro_area(target)


def salary_digits(text: Optional[str]) -> Optional[int]:
    """Every digit run joined into one integer: "200만원" -> 200, "1,800,000" -> 1800000."""
    numbers = _DIGITS.findall(text or "")
    if not numbers:
        return None
    return int("".join(numbers))


def parse_salary(text: Optional[str]) -> Optional[int]:
    """
    Monthly salary from free text. Values of 100,000 and above are taken as
    monthly. Smaller values are in 만원 when written so ("200만원"), otherwise
    an hourly wage scaled to a month. Multi-number ranges ("200~250만원") are
    concatenated as-is and land in the monthly class.
    """
    value = salary_digits(text)
    if value is None:
        return None
    if value >= HOURLY_THRESHOLD:
        return value
    if _MAN_UNIT.search(text or ""):
        # "200만원" must land inside a 180~220만원 job range, not read as 200/hour
        return value * MAN_WON
    return value * HOURLY_TO_MONTHLY


@dataclass(frozen=True)
class TextSignals:
    """Korean free-text markers read from profile answers."""

    alone_marker: str = "혼"
    together_marker: str = "같이"
    low_marker: str = "낮"

    def expected_salary(self, text: Optional[str]) -> Optional[int]:
        return parse_salary(text)

    def prefers_alone(self, social_preference: Optional[str]) -> bool:
        return self.alone_marker in normalize(social_preference)

    def prefers_together(self, social_preference: Optional[str]) -> bool:
        return self.together_marker in normalize(social_preference)

    def low_digital(self, digital_literacy: Optional[str]) -> bool:
        return self.low_marker in normalize(digital_literacy)


DEFAULT_SIGNALS = TextSignals()
