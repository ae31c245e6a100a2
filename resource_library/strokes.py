# resource_library/strokes.py
"""Serialization of calligraphy stroke data for persistence and replay."""

import json
from typing import List, Optional, Sequence

from pydantic import ValidationError

from .models import StrokeData


class StrokeDataError(ValueError):
    """Raised when a payload cannot be decoded into strokes.

    ``index`` is the position of the offending element, or ``None`` when
    the payload as a whole is unusable (bad JSON, not an array).
    """

    def __init__(self, message: str, index: Optional[int] = None):
        super().__init__(message)
        self.index = index


def serialize(strokes: Sequence[StrokeData]) -> str:
    """Encode strokes as a JSON array (camelCase keys, absent pressure omitted)."""
    payload = [s.model_dump(by_alias=True, exclude_none=True) for s in strokes]
    return json.dumps(payload, allow_nan=False)


def deserialize(data: str) -> List[StrokeData]:
    """Decode and validate a JSON array of strokes.

    Raises ``StrokeDataError`` on invalid JSON, a non-array top level, or
    the first element that is not a well-formed stroke.
    """
    try:
        parsed = json.loads(data)
    except (TypeError, ValueError) as e:
        raise StrokeDataError(f"Invalid stroke data: not valid JSON ({e})") from e

    if not isinstance(parsed, list):
        raise StrokeDataError("Invalid stroke data: expected an array")

    strokes: List[StrokeData] = []
    for i, entry in enumerate(parsed):
        # pressure, when present, must be an array; null is not "absent"
        if not isinstance(entry, dict) or ("pressure" in entry and entry["pressure"] is None):
            raise StrokeDataError(f"Invalid stroke data at index {i}", index=i)
        try:
            strokes.append(StrokeData.model_validate(entry))
        except ValidationError as e:
            raise StrokeDataError(
                f"Invalid stroke data at index {i}: {e.error_count()} error(s)", index=i
            ) from e
    return strokes
