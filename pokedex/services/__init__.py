"""Service layer for business logic and external integrations."""

from .catalog_loader import CatalogLoaderService, batch_progress_percent
from .catalog_view import ALL, CatalogPage, ViewState, derive_page
from .config import ConfigurationService, ValidationResult
from .detail_service import DetailService
from .errors import (
    AppError,
    CatalogLoadError,
    ConfigurationError,
    EntryNotFoundError,
    ErrorCategory,
    ErrorHandlingService,
    ErrorSeverity,
    NetworkError,
    UserFriendlyError,
    ValidationError,
    get_error_service,
    handle_error,
)
from .http_client import HttpClientService

__all__ = [
    "ALL",
    "AppError",
    "CatalogLoadError",
    "CatalogLoaderService",
    "CatalogPage",
    "ConfigurationError",
    "ConfigurationService",
    "DetailService",
    "EntryNotFoundError",
    "ErrorCategory",
    "ErrorHandlingService",
    "ErrorSeverity",
    "HttpClientService",
    "NetworkError",
    "UserFriendlyError",
    "ValidationError",
    "ValidationResult",
    "ViewState",
    "batch_progress_percent",
    "derive_page",
    "get_error_service",
    "handle_error",
]
