"""
Tolerant parsing of model output into MenuItem records.

The model is asked for a bare JSON array, but in practice the array may be
wrapped in prose or cut off when the output token limit is reached. The
parser locates the array, salvages truncated output, and projects each
loosely-typed record onto the strict MenuItem model with per-field
fallbacks instead of failing the whole batch.
"""

import json
import logging
import math
from typing import Any

from menusnap.core.exceptions import MalformedEnvelope, Unparseable
from menusnap.models.menu import DEFAULT_HEALTH_REASON, MenuItem

logger = logging.getLogger(__name__)

DEFAULT_HEALTH_SCORE = 5


def extract_text(envelope: Any) -> str:
    """
    Pull the model's answer out of a Messages API response body.

    Args:
        envelope: Decoded JSON response body

    Returns:
        Text of the first content block

    Raises:
        MalformedEnvelope: If the body has no ``content[0].text`` string
    """
    if not isinstance(envelope, dict):
        raise MalformedEnvelope("Response body is not a JSON object")

    content = envelope.get("content")
    if not isinstance(content, list) or not content:
        raise MalformedEnvelope("Response has no content blocks")

    first = content[0]
    text = first.get("text") if isinstance(first, dict) else None
    if not isinstance(text, str):
        raise MalformedEnvelope(
            "First content block has no text",
            details={"block_type": first.get("type") if isinstance(first, dict) else None},
        )
    return text


def extract_json_array(text: str) -> str:
    """
    Extract the JSON array from free-form model text.

    Takes everything from the first ``[`` to the last ``]``. When the
    closing bracket is missing (truncated generation) the array is cut
    after the last complete ``}`` and closed, dropping any partial
    trailing object. Text without ``[`` yields an empty array.
    """
    start = text.find("[")
    if start == -1:
        return "[]"

    end = text.rfind("]")
    candidate = text[start : end + 1] if end > start else text[start:]

    if not candidate.endswith("]"):
        last_brace = candidate.rfind("}")
        if last_brace == -1:
            logger.warning("Truncated array has no complete object; treating as empty")
            return "[]"
        logger.warning(
            f"Repairing truncated array: dropping {len(candidate) - last_brace - 1} trailing chars"
        )
        candidate = candidate[: last_brace + 1] + "]"

    return candidate


def _round_half_up(number: float) -> int:
    return math.floor(number + 0.5)


def parse_health_score(value: Any) -> int:
    """
    Read a score from an int, float or numeric string; default to 5.

    Fractional scores round half up, so 8.5 becomes 9 and 9.5 becomes 10.
    """
    if isinstance(value, bool):
        return DEFAULT_HEALTH_SCORE
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return _round_half_up(value) if math.isfinite(value) else DEFAULT_HEALTH_SCORE
    if isinstance(value, str):
        stripped = value.strip()
        try:
            return int(stripped)
        except ValueError:
            pass
        try:
            number = float(stripped)
        except ValueError:
            return DEFAULT_HEALTH_SCORE
        return _round_half_up(number) if math.isfinite(number) else DEFAULT_HEALTH_SCORE
    return DEFAULT_HEALTH_SCORE


def _optional_text(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    # Calories sometimes come back as a bare number
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def to_menu_item(record: dict[str, Any]) -> MenuItem | None:
    """
    Project one loosely-typed record onto MenuItem.

    Returns None for records without a usable ``name``.
    """
    name = record.get("name")
    if not isinstance(name, str) or not name.strip():
        return None

    reason = record.get("healthReason")
    description = record.get("description")

    return MenuItem(
        name=name,
        description=description if isinstance(description, str) else None,
        health_score=parse_health_score(record.get("healthScore")),
        health_reason=reason if isinstance(reason, str) else DEFAULT_HEALTH_REASON,
        calories=_optional_text(record.get("calories")),
    )


def parse(raw_text: str) -> list[MenuItem]:
    """
    Parse model output into menu items, preserving the model's order.

    Args:
        raw_text: The model's raw answer

    Returns:
        MenuItems in input order; records without a name are dropped

    Raises:
        Unparseable: If the extracted text is not a JSON array of objects
    """
    json_str = extract_json_array(raw_text)

    try:
        data = json.loads(json_str)
    except (ValueError, RecursionError) as e:
        # ValueError also covers integer literals over the int digit limit
        logger.warning(f"Failed to parse JSON: {json_str[:500]}")
        raise Unparseable(f"Invalid JSON array: {e}") from e

    if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
        raise Unparseable("Expected a JSON array of objects")

    items = []
    for index, record in enumerate(data):
        item = to_menu_item(record)
        if item is None:
            logger.warning(f"Dropping menu record {index}: missing name")
            continue
        items.append(item)

    logger.info(f"Parsed {len(items)} menu items ({len(data) - len(items)} dropped)")
    return items
