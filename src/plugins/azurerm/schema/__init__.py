"""Schema of the user-facing App Service configuration blocks."""

from .app_service import (
    ALLOWED_VALUES,
    BLOCK_NAME,
    CASE_INSENSITIVE_FIELDS,
    FieldState,
    IpRestriction,
    SiteConfig,
)
from .suppress import case_difference

__all__ = [
    "ALLOWED_VALUES",
    "BLOCK_NAME",
    "CASE_INSENSITIVE_FIELDS",
    "FieldState",
    "IpRestriction",
    "SiteConfig",
    "case_difference",
]
