"""Crash reporting keyed by safe integer IDs.

Each crash gets an ID from the default generator; the recorded time is
decoded back out of that ID, so `id` and `timestamp` always agree.
"""

import json
import os
import sys
import traceback

from ids.default import get_default

_crash_log = "logs/crash.log"


def configure(crash_file):
    """Set crash log file path from config."""
    global _crash_log
    _crash_log = crash_file


def new_crash_id():
    """Fresh crash ID and its decoded UTC time, ISO 8601 to the millisecond."""
    codec = get_default()
    crash_id = codec.get_id()
    created_at = codec.get_created_at(crash_id, utc=True)
    return crash_id, created_at.strftime("%Y-%m-%dT%H:%M:%S.") + f"{created_at.microsecond // 1000:03d}Z"


def _format_traceback(exc):
    if exc is None:
        return None
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def _append(record):
    """Append one JSON line to the crash log. Never raises."""
    try:
        log_dir = os.path.dirname(_crash_log)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        with open(_crash_log, "a") as f:
            f.write(json.dumps(record, default=str) + "\n")
    except Exception:
        pass


def log_crash(exc_type, exc_value, exc_tb):
    """sys.excepthook: banner on stderr plus a crash record. Returns the crash ID."""
    crash_id, timestamp = new_crash_id()
    name = exc_type.__name__ if exc_type else "Unknown"
    tb = "".join(traceback.format_exception(exc_type, exc_value, exc_tb))

    rule = "=" * 60
    sys.stderr.write(f"\n{rule}\nCRASH [{crash_id}] {timestamp}\n{rule}\n{name}: {exc_value or ''}\n{tb}{rule}\n\n")
    _append({"id": crash_id, "timestamp": timestamp, "type": name, "msg": str(exc_value or ""), "traceback": tb})
    return crash_id


def log_async_crash(exc, context, logger=None):
    """Event-loop crash: logged through LOGGER if given, recorded to file."""
    crash_id, timestamp = new_crash_id()
    msg = str(exc) if exc else context.get("message", "Unknown")
    record = {
        "id": crash_id,
        "timestamp": timestamp,
        "type": type(exc).__name__ if exc else "AsyncError",
        "msg": msg,
        "traceback": _format_traceback(exc),
        "task": str(context.get("future") or context.get("task") or "unknown"),
    }

    if logger:
        logger.error("Async exception", error=msg, crash_id=crash_id, task=record["task"])

    _append(record)
    return crash_id


def create_async_handler(logger=None):
    """Exception handler for loop.set_exception_handler."""
    def handler(loop, context):
        log_async_crash(context.get("exception"), context, logger)
    return handler


def install_crash_handler():
    """Install global sync exception handler."""
    sys.excepthook = log_crash
