"""ID minting and decoding routes."""

from enum import Enum

from fastapi import APIRouter, HTTPException, Query

from core.errors import IdRangeError
from ids.codec import MAX_SAFE_INTEGER
from internal.logging import get_logger

router = APIRouter(prefix="/api/v1/ids", tags=["ids"])

MAX_BATCH = 1000

# Set by app.py
_codec = None


class Mode(str, Enum):
    RANDOM = "random"
    SEQUENTIAL = "sequential"


def init(codec):
    """Initialize with the generator serving this app."""
    global _codec
    _codec = codec


@router.post("")
async def mint(mode: Mode = Mode.RANDOM, count: int = Query(1, ge=1, le=MAX_BATCH)):
    """Mint COUNT new IDs."""
    if mode == Mode.SEQUENTIAL:
        ids = [await _codec.inc_id_async() for _ in range(count)]
    else:
        ids = [_codec.get_id() for _ in range(count)]
    get_logger().debug("ids minted", mode=mode.value, count=count)
    return {"mode": mode.value, "ids": ids}


@router.get("/config")
async def config():
    """Derived generator configuration."""
    return {**_codec.to_dict(), "max_safe_integer": MAX_SAFE_INTEGER}


@router.get("/{id_value}/created-at")
async def created_at(id_value: int, utc: bool = False):
    """Creation time encoded in an ID."""
    try:
        dt = _codec.get_created_at(id_value, utc=utc)
    except IdRangeError as exc:
        get_logger().warn("decode out of range", error=exc, id=id_value)
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return {
        "id": id_value,
        "created_at": dt.isoformat(timespec="milliseconds"),
        "timestamp_ms": _codec.timestamp_of(id_value) + _codec.epoch_millis,
    }
