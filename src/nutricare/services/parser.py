"""Tolerant decoder for free-form nutrition replies from the assistant."""

import json
import logging
import re
from dataclasses import dataclass

from pydantic.alias_generators import to_camel

from nutricare.domain.nutrition import (
    NUMERIC_FIELDS,
    NutritionRecord,
    ParsedNutrition,
    ParseSource,
)
from nutricare.domain.profile import Profile
from nutricare.services.scoring import with_derived_fields

_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")
_DIGITS = re.compile(r"\d{1,3}(?:,\d{3})+|\d+")
_NUMBER = re.compile(r"\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:\.\d+)?")
_NON_WORD = re.compile(r"[^\w\s]")
_FOOD_NAME_LENGTH = 50

_LINE_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("calories", ("calories",)),
    ("sodium", ("sodium",)),
    ("sugar", ("sugar",)),
    ("carbs", ("carbs", "carbohydrate")),
    ("protein", ("protein",)),
    ("fiber", ("fiber",)),
)
_DERIVED_FIELDS = ("health_score", "risks", "warnings")

_logger = logging.getLogger(__name__)


def _build_key_map() -> dict[str, str]:
    """Map snake_case names and camelCase aliases onto record fields."""
    key_map: dict[str, str] = {}
    for name in NutritionRecord.model_fields:
        key_map[name] = name
        key_map[to_camel(name)] = name
    return key_map


_KEY_MAP = _build_key_map()


@dataclass
class ResponseParser:
    """Convert assistant text into a nutrition record with a validity report."""

    def decode(self, text: str, profile: Profile) -> ParsedNutrition:
        """Decode a reply, preferring an embedded JSON object over line scanning."""
        try:
            decoded = _find_object(text)
            if decoded is not None:
                parsed = _from_object(decoded)
            else:
                parsed = _from_lines(text, profile)
        except (ValueError, TypeError):
            _logger.exception("Failed to parse nutrition reply")
            return ParsedNutrition(
                record=NutritionRecord(),
                source=ParseSource.DEFAULT,
                fields_found=frozenset(),
            )
        _logger.info(
            "Parsed nutrition reply: source=%s fields=%s/%s",
            parsed.source,
            len(parsed.fields_found),
            len(NUMERIC_FIELDS),
        )
        return parsed


def _find_object(text: str) -> dict[str, object] | None:
    """Return the embedded object literal, or None when absent or malformed."""
    match = _OBJECT_PATTERN.search(text)
    if not match:
        return None
    try:
        decoded = json.loads(match.group(0))
    except json.JSONDecodeError:
        _logger.info("Embedded object in reply is not valid JSON; scanning lines")
        return None
    if not isinstance(decoded, dict):
        return None
    return decoded


def _from_object(decoded: dict[str, object]) -> ParsedNutrition:
    """Overlay known keys onto a default record without rescoring it."""
    values: dict[str, object] = {}
    found: set[str] = set()
    for key, raw in decoded.items():
        field_name = _KEY_MAP.get(key)
        if field_name is None:
            continue
        if field_name in NUMERIC_FIELDS or field_name == "health_score":
            number = _coerce_number(raw)
            if number is None:
                continue
            values[field_name] = number
            if field_name in NUMERIC_FIELDS:
                found.add(field_name)
        elif field_name == "food_name":
            if isinstance(raw, str) and raw.strip():
                values[field_name] = raw.strip()
        elif isinstance(raw, list):
            values[field_name] = tuple(str(item) for item in raw)

    return ParsedNutrition(
        record=NutritionRecord(**values),
        source=ParseSource.JSON,
        fields_found=frozenset(found),
        derived_found=frozenset(name for name in _DERIVED_FIELDS if name in values),
    )


def _from_lines(text: str, profile: Profile) -> ParsedNutrition:
    values: dict[str, object] = {}
    for line in text.lower().split("\n"):
        for field_name, keywords in _LINE_KEYWORDS:
            if not any(keyword in line for keyword in keywords):
                continue
            match = _DIGITS.search(line)
            if match:
                values[field_name] = int(match.group(0).replace(",", ""))

    found = frozenset(values)
    first_line = text.split("\n")[0]
    food_name = _NON_WORD.sub("", first_line[:_FOOD_NAME_LENGTH]).strip()
    if food_name:
        values["food_name"] = food_name

    record = NutritionRecord(**values)
    return ParsedNutrition(
        record=with_derived_fields(record, profile),
        source=ParseSource.HEURISTIC,
        fields_found=found,
    )


def _coerce_number(raw: object) -> float | None:
    """Read a number from JSON values such as 350, 12.5, "400 mg" or "2,300 mg"."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int | float):
        return float(raw)
    if isinstance(raw, str):
        match = _NUMBER.search(raw)
        if match:
            return float(match.group(0).replace(",", ""))
    return None
