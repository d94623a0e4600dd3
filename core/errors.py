"""Custom errors with tracking IDs."""

from utils.timestamp import format_timestamp


class BaseIdError(Exception):
    """Base error with unique ID and timestamp for tracking."""

    def __init__(self, message, context=None, cause=None):
        super().__init__(message)
        # ids.codec imports this module
        from ids.default import get_default
        self.error_id = get_default().get_id()
        self.timestamp = format_timestamp()
        self.context = context or {}
        self.cause = cause

    def __str__(self):
        return f"[{self.error_id}] {super().__str__()}"


class ConfigError(BaseIdError):
    """Invalid or unreadable configuration."""

    def __init__(self, message, section=None, **kwargs):
        context = kwargs.pop("context", {})
        if section:
            context["section"] = section
        super().__init__(message, context=context, **kwargs)


class IdRangeError(BaseIdError, ValueError):
    """Decoded timestamp falls outside the representable datetime range."""

    def __init__(self, message, id_value=None, **kwargs):
        context = kwargs.pop("context", {})
        if id_value is not None:
            context["id"] = id_value
        super().__init__(message, context=context, **kwargs)
