"""Health and horizon routes."""

from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from core.health import Status
from ids.codec import MAX_SAFE_INTEGER
from utils.timestamp import format_timestamp

router = APIRouter(prefix="/api/v1", tags=["health"])

# Set by app.py
_codec = None
_health_checker = None


def init(codec, health_checker):
    """Wire the app's generator and health checker."""
    global _codec, _health_checker
    _codec = codec
    _health_checker = health_checker


@router.get("/health")
async def health():
    """Aggregated check report, 503 when a critical check fails."""
    report = await _health_checker.check()
    status_code = 200 if report.status != Status.FAIL else 503
    return JSONResponse(content=report.to_dict(), status_code=status_code)


@router.get("/heartbeat")
async def heartbeat():
    """Current tick and remaining safe headroom, cheap enough to poll."""
    tick = _codec.elapsed_millis()
    highest = _codec.encode(tick, _codec.disambiguation_space - 1)
    return {
        "status": "ok",
        "timestamp": format_timestamp(),
        "tick": tick,
        "last_safe_year": _codec.last_safe_year,
        "safe_years_left": _codec.last_safe_year - datetime.now(timezone.utc).year,
        "headroom": MAX_SAFE_INTEGER - highest,
    }
