"""Process-wide default generator, created on first use."""

import threading

from ids.codec import SafeIntId
from internal.logging import get_logger

_default = None
_default_lock = threading.Lock()


def get_default():
    """Default SafeIntId (epoch 2023, 1024 values per millisecond)."""
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = _create(SafeIntId())
    return _default


def configure_default(*args, **kwargs):
    """Replace the default generator. Takes SafeIntId arguments or an instance."""
    global _default
    codec = args[0] if len(args) == 1 and not kwargs and isinstance(args[0], SafeIntId) else SafeIntId(*args, **kwargs)
    with _default_lock:
        _default = _create(codec)
    return _default


def _create(codec):
    get_logger().debug("default id generator ready", epoch_year=codec.epoch_year,
                       disambiguation_space=codec.disambiguation_space, last_safe_year=codec.last_safe_year)
    return codec
