"""
Custom exceptions for the Kijiji taxonomy scraper

Every error is fatal for the whole multi-locale run: nothing here is retried,
and a partially merged taxonomy is never printed.
"""

from typing import Any, Optional, Dict


class ScrapeError(Exception):
    """Base exception for every scrape failure"""

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        """
        Args:
            message: Error message
            context: Extra context (url, locale, anchor, ...)
            original_error: Wrapped library exception, if any
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.original_error = original_error

    def __str__(self) -> str:
        base_msg = self.message
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{base_msg} [{context_str}]"
        return base_msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dict for logging"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
            "original_error": str(self.original_error) if self.original_error else None,
        }


class NetworkError(ScrapeError):
    """HTTP fetch failed (connection, timeout, non-2xx status)"""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        context = context or {}
        if url:
            context["url"] = url
        if status_code:
            context["status_code"] = status_code
        super().__init__(message, context=context, original_error=original_error)


class SeleniumError(ScrapeError):
    """Headless browser could not start or render the page"""

    def __init__(
        self,
        message: str,
        driver_error: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        context = context or {}
        if driver_error:
            context["driver_error"] = driver_error
        super().__init__(message, context=context, original_error=original_error)


class PayloadNotFoundError(ScrapeError):
    """The anchor string never appears in the fetched document"""

    def __init__(
        self,
        message: str = "Payload anchor not found",
        anchor: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        context = context or {}
        if anchor is not None:
            context["anchor"] = anchor
        super().__init__(message, context=context)


class MalformedPayloadError(ScrapeError):
    """The delimiter scan found no balanced closing delimiter"""

    def __init__(
        self,
        message: str,
        anchor: Optional[str] = None,
        position: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        context = context or {}
        if anchor is not None:
            context["anchor"] = anchor
        if position is not None:
            context["position"] = position
        super().__init__(message, context=context)


class DecodeError(ScrapeError):
    """The located payload is not valid data of the expected shape"""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        context = context or {}
        if path:
            context["path"] = path
        super().__init__(message, context=context, original_error=original_error)


class InvariantViolation(ScrapeError):
    """Merged taxonomy is not a forest (dangling parent or cycle)"""

    def __init__(
        self,
        message: str,
        entity_id: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        context = context or {}
        if entity_id is not None:
            context["entity_id"] = entity_id
        super().__init__(message, context=context)


class ConfigurationError(ScrapeError):
    """Missing or invalid configuration value"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        context = context or {}
        if config_key:
            context["config_key"] = config_key
        super().__init__(message, context=context, original_error=original_error)


class StorageError(ScrapeError):
    """Writing the JSON export failed"""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        context = context or {}
        if path:
            context["path"] = path
        if operation:
            context["operation"] = operation
        super().__init__(message, context=context, original_error=original_error)
