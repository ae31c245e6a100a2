# resource_library/models.py
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing_extensions import Annotated

# Strict: no string coercion, no booleans. JSON has no NaN/Infinity, so
# non-finite values are refused too.
StrictNumber = Annotated[float, Field(strict=True, allow_inf_nan=False)]


class Point(BaseModel):
    x: StrictNumber
    y: StrictNumber
    timestamp: StrictNumber


class StrokeData(BaseModel):
    """One pen-down to pen-up stroke of a calligraphy drawing.

    Fields are populated by their camelCase names only (``startTime``,
    ``endTime``), in Python as on the wire.
    """

    model_config = ConfigDict(alias_generator=to_camel)

    id: str = Field(strict=True)
    points: List[Point]
    start_time: StrictNumber
    end_time: StrictNumber
    # Only recorded on devices reporting pen pressure; None means absent.
    pressure: Optional[List[StrictNumber]] = None
