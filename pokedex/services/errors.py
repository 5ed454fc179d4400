"""Application errors and the service that turns them into user messages.

Two failures matter to the catalog: the index cannot be loaded (fatal,
``CatalogLoadError``) and a detail record cannot be fetched (per-entry,
``EntryNotFoundError``). Everything else raised by httpx or by payload
mapping is converted into one of the generic kinds below. Users only ever
see ``message`` and ``suggested_actions``; ``technical_details`` goes to
the log.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import httpx
import structlog

log = structlog.stdlib.get_logger()


class ErrorCategory(Enum):
    NETWORK = "network"
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    CATALOG = "catalog"
    NOT_FOUND = "not_found"
    UNEXPECTED = "unexpected"


class ErrorSeverity(Enum):
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass(frozen=True)
class ErrorContext:
    """Where an unexpected error was raised."""
    operation: str
    component: str
    details: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class UserFriendlyError:
    """What the UI needs to report an error."""
    message: str
    category: ErrorCategory
    severity: ErrorSeverity
    suggested_actions: list[str]
    technical_details: str | None = None
    recoverable: bool = True


def describe_exception(error: Exception | None) -> str | None:
    """``"TypeName: message"`` for technical details, or None."""
    if error is None:
        return None
    return f"{type(error).__name__}: {error}"


def _join_details(*parts: str | None) -> str | None:
    return "\n".join(p for p in parts if p) or None


class AppError(Exception):
    """Base class for errors the application knows how to report."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNEXPECTED,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        suggested_actions: list[str] | None = None,
        technical_details: str | None = None,
        recoverable: bool = True,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.category = category
        self.severity = severity
        self.suggested_actions = suggested_actions or []
        self.technical_details = technical_details
        self.recoverable = recoverable
        self.context = context

    def to_user_friendly(self) -> UserFriendlyError:
        return UserFriendlyError(
            message=self.message,
            category=self.category,
            severity=self.severity,
            suggested_actions=list(self.suggested_actions),
            technical_details=self.technical_details,
            recoverable=self.recoverable,
        )


def _network_suggestions(status_code: int | None) -> list[str]:
    if status_code == 429:
        return ["Wait a few minutes before reloading"]
    if status_code is not None and status_code >= 500:
        return ["The API is experiencing issues", "Try again later"]
    return ["Check your internet connection", "Restart the application to load again"]


class NetworkError(AppError):
    """A request to the API failed (connection, timeout or HTTP status)."""

    def __init__(
        self,
        message: str,
        original_error: Exception | None = None,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(
            message=message,
            category=ErrorCategory.NETWORK,
            suggested_actions=_network_suggestions(status_code),
            technical_details=_join_details(
                f"Status: {status_code}" if status_code else None,
                f"URL: {url}" if url else None,
                describe_exception(original_error),
            ),
        )
        self.original_error = original_error
        self.url = url
        self.status_code = status_code


class ValidationError(AppError):
    """Data (a payload or a setting) did not have the expected form."""

    MAX_VALUE_LENGTH = 100

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        constraints: list[str] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.WARNING,
            suggested_actions=["Review the input requirements"]
            + [f"Ensure: {c}" for c in constraints or []],
            technical_details=_join_details(
                f"Field: {field}" if field else None,
                f"Value: {str(value)[:self.MAX_VALUE_LENGTH]}" if value is not None else None,
            ),
        )
        self.field = field
        self.value = value
        self.constraints = constraints or []


class ConfigurationError(AppError):
    """The configuration file failed validation."""

    def __init__(
        self,
        message: str,
        setting: str | None = None,
        errors: list[str] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            category=ErrorCategory.CONFIGURATION,
            suggested_actions=[
                "Check the configuration file",
                "Delete it to fall back to default values",
            ],
            technical_details=_join_details(*(errors or [])),
        )
        self.setting = setting
        self.errors = errors or []


class CatalogLoadError(AppError):
    """The catalog index could not be fetched; no partial catalog is shown."""

    def __init__(
        self,
        message: str = "The catalog could not be loaded.",
        url: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(
            message=message,
            category=ErrorCategory.CATALOG,
            severity=ErrorSeverity.CRITICAL,
            suggested_actions=["Restart the application"],
            technical_details=_join_details(
                f"URL: {url}" if url else None,
                describe_exception(original_error),
            ),
            recoverable=False,
        )
        self.url = url
        self.original_error = original_error


class EntryNotFoundError(AppError):
    """The detail record for an entry could not be retrieved."""

    def __init__(
        self,
        entry_id: int | str,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(
            message="Entry not found.",
            category=ErrorCategory.NOT_FOUND,
            severity=ErrorSeverity.WARNING,
            suggested_actions=["Go back to the catalog"],
            technical_details=_join_details(f"Entry: {entry_id}", describe_exception(original_error)),
        )
        self.entry_id = entry_id
        self.original_error = original_error


HTTP_STATUS_MESSAGES: dict[int, str] = {
    400: "The request was invalid.",
    404: "The requested resource was not found.",
    408: "The request timed out. Please try again.",
    429: "Too many requests. Please wait before trying again.",
    500: "The API encountered an error. Please try again later.",
    502: "The API is temporarily unavailable. Please try again later.",
    503: "The API is temporarily unavailable. Please try again later.",
    504: "The API took too long to respond. Please try again.",
}


def http_status_message(status_code: int) -> str:
    return HTTP_STATUS_MESSAGES.get(status_code, f"HTTP error {status_code} occurred.")


def to_app_error(
    error: Exception,
    operation: str,
    component: str,
    context: dict[str, Any] | None = None,
) -> AppError:
    """Classify an arbitrary exception as an AppError.

    AppErrors are returned unchanged. httpx errors become NetworkErrors,
    decoding and shape errors become ValidationErrors, and anything else is
    reported as unexpected with the operation recorded in its context.
    """
    if isinstance(error, AppError):
        return error

    context = context or {}
    url = context.get("url")

    match error:
        case httpx.ConnectError():
            return NetworkError(
                "Unable to connect to the API. Please check your internet connection.",
                original_error=error,
                url=url,
            )
        case httpx.TimeoutException():
            return NetworkError(
                "The request timed out. The API may be slow or unavailable.",
                original_error=error,
                url=url,
            )
        case httpx.HTTPStatusError(response=response, request=request):
            return NetworkError(
                http_status_message(response.status_code),
                original_error=error,
                url=str(request.url),
                status_code=response.status_code,
            )
        case httpx.RequestError():
            return NetworkError(
                "A network error occurred. Please check your connection.",
                original_error=error,
                url=url,
            )
        # Before ValueError: JSONDecodeError subclasses it
        case json.JSONDecodeError():
            return ValidationError("The API returned data that could not be parsed.", field="json_content")
        case KeyError() | TypeError():
            return ValidationError("The API returned data in an unexpected shape.", field=str(error))
        case ValueError():
            return ValidationError(str(error), field=context.get("field"), value=context.get("value"))
        case _:
            return AppError(
                "An unexpected error occurred.",
                technical_details=describe_exception(error),
                context=ErrorContext(operation=operation, component=component, details=context),
            )


class ErrorHandlingService:
    """Classifies errors and logs their technical details."""

    def __init__(self) -> None:
        log.info("Error handling service initialized")

    def handle_error(
        self,
        error: Exception,
        operation: str,
        component: str,
        context: dict[str, Any] | None = None,
    ) -> UserFriendlyError:
        """Record an error and return what the user should be told.

        Args:
            error: The exception that occurred
            operation: What was being attempted (e.g. ``"load_catalog"``)
            component: The screen or service reporting it
            context: Extra values for the log; ``url``, ``field`` and
                ``value`` are also used when classifying

        Returns:
            User-facing view of the classified error
        """
        app_error = to_app_error(error, operation, component, context)

        log_method = log.warning if app_error.severity is ErrorSeverity.WARNING else log.error
        log_method(
            "Error occurred",
            error_message=app_error.message,
            category=app_error.category.value,
            severity=app_error.severity.value,
            operation=operation,
            component=component,
            technical_details=app_error.technical_details,
            recoverable=app_error.recoverable,
            context=context,
        )

        return app_error.to_user_friendly()

    def create_user_message(
        self,
        error: UserFriendlyError,
        include_suggestions: bool = True,
    ) -> str:
        """Format an error for display, with at most three suggested actions."""
        if not include_suggestions or not error.suggested_actions:
            return error.message

        lines = [error.message, "\nSuggested actions:"]
        lines.extend(f"  • {action}" for action in error.suggested_actions[:3])
        return "\n".join(lines)


_error_service: ErrorHandlingService | None = None


def get_error_service() -> ErrorHandlingService:
    """Process-wide error service, created on first use."""
    global _error_service
    if _error_service is None:
        _error_service = ErrorHandlingService()
    return _error_service


def handle_error(
    error: Exception,
    operation: str,
    component: str,
    context: dict[str, Any] | None = None,
) -> UserFriendlyError:
    return get_error_service().handle_error(error, operation, component, context)
