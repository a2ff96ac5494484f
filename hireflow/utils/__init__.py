"""
Utility modules for HireFlow.

This package contains shared utilities used across the application:
- config: Configuration management
- logger: Logging infrastructure
- constants: Pipeline definition, scoring weights and keyword lists
- normalize: Skill and location normalization
"""

from hireflow.utils.config import (
    AppSettings,
    get_settings,
    reload_settings,
    ROOT_DIR,
    PACKAGE_DIR,
    LOGS_DIR,
)
from hireflow.utils.constants import (
    APP_NAME,
    APP_DISPLAY_NAME,
    VERSION,
    ApplicationStatus,
    AuditAction,
    UserRole,
)
from hireflow.utils.logger import (
    setup_logging,
    get_logger,
    audit_log,
    LoggerMixin,
)
from hireflow.utils.normalize import (
    coerce_years,
    normalize_location,
    normalize_tokens,
)

__all__ = [
    # Config
    "AppSettings",
    "get_settings",
    "reload_settings",
    "ROOT_DIR",
    "PACKAGE_DIR",
    "LOGS_DIR",
    # Constants
    "APP_NAME",
    "APP_DISPLAY_NAME",
    "VERSION",
    "ApplicationStatus",
    "AuditAction",
    "UserRole",
    # Logger
    "setup_logging",
    "get_logger",
    "audit_log",
    "LoggerMixin",
    # Normalization
    "coerce_years",
    "normalize_location",
    "normalize_tokens",
]
