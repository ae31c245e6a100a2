# resource_library/calligraphy.py
import logging
from typing import List

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from .models import StrokeData
from .strokes import StrokeDataError, deserialize, serialize


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/calligraphy", tags=["calligraphy"])


class EncodedStrokes(BaseModel):
    data: str
    count: int


@router.post("/strokes/decode", response_model=List[StrokeData], response_model_exclude_none=True)
async def decode_strokes(request: Request):
    """Validate a serialized stroke payload (raw request body)."""
    raw = (await request.body()).decode("utf-8", errors="replace")
    try:
        return deserialize(raw)
    except StrokeDataError as e:
        logger.debug("Rejected stroke payload: %s", e)
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/strokes/encode", response_model=EncodedStrokes)
def encode_strokes(strokes: List[StrokeData]):
    return EncodedStrokes(data=serialize(strokes), count=len(strokes))
