from ids.codec import SafeIntId, MAX_SAFE_INTEGER, MILLIS_PER_YEAR
from ids.sequence import Sequence, spin, yield_thread
from ids.default import get_default, configure_default

__all__ = [
    "SafeIntId",
    "Sequence",
    "MAX_SAFE_INTEGER",
    "MILLIS_PER_YEAR",
    "spin",
    "yield_thread",
    "get_default",
    "configure_default",
]
