from utils.timestamp import now_millis, now_micros, format_timestamp
from core.errors import BaseIdError, ConfigError, IdRangeError

__all__ = [
    "now_millis",
    "now_micros",
    "format_timestamp",
    "BaseIdError",
    "ConfigError",
    "IdRangeError",
]
