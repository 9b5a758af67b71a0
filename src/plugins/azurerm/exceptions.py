"""
AzureRM Plugin Exception Classes

Custom exceptions for the App Service site_config mapping layer.
"""

from typing import Any


class AzureRMPluginError(Exception):
    """Base exception for all AzureRM plugin errors."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.context = context or {}

    def __str__(self) -> str:
        base_msg = super().__str__()
        if self.error_code:
            base_msg = f"[{self.error_code}] {base_msg}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg = f"{base_msg} (Context: {context_str})"
        return base_msg


class InvalidNetworkLiteral(AzureRMPluginError, ValueError):
    """Raised when an IP address, mask or CIDR string cannot be parsed as IPv4."""

    def __init__(self, message: str, literal: str) -> None:
        super().__init__(message, "INVALID_NETWORK_LITERAL", {"literal": literal})
        self.literal = literal


class InvalidSubnetMask(InvalidNetworkLiteral):
    """Raised when a subnet mask is malformed or not contiguous."""

    def __init__(self, message: str, literal: str) -> None:
        super().__init__(message, literal)
        self.error_code = "INVALID_SUBNET_MASK"


class ValidationError(AzureRMPluginError):
    """Raised when a site_config field fails validation."""

    def __init__(
        self,
        message: str,
        field_name: str | None = None,
        expected_type: type | None = None,
        actual_value: Any = None,
    ) -> None:
        context = {}
        if field_name:
            context["field_name"] = field_name
        if expected_type:
            context["expected_type"] = expected_type.__name__
        if actual_value is not None:
            context["actual_value"] = str(actual_value)
        super().__init__(message, "VALIDATION_ERROR", context)
        self.field_name = field_name

    def get_recovery_hint(self) -> str:
        """Provide a helpful hint for fixing the validation error."""
        if "field_name" in self.context and "expected_type" in self.context:
            field = self.context["field_name"]
            expected = self.context["expected_type"]
            return f"Ensure '{field}' is of type {expected}"
        if "field_name" in self.context:
            return f"Check the value of '{self.context['field_name']}'"
        return "Check the site_config block for missing or invalid fields"


class RemoteDataError(AzureRMPluginError):
    """Raised when a SiteConfig returned by the API cannot be flattened."""

    def __init__(
        self,
        message: str,
        field_name: str | None = None,
        actual_value: Any = None,
    ) -> None:
        context = {}
        if field_name:
            context["field_name"] = field_name
        if actual_value is not None:
            context["actual_value"] = str(actual_value)
        super().__init__(message, "REMOTE_DATA_ERROR", context)
        self.field_name = field_name


class ConfigLoadError(AzureRMPluginError):
    """Raised when a configuration document cannot be read or parsed."""

    def __init__(self, message: str, path: str | None = None) -> None:
        context = {"path": path} if path else {}
        super().__init__(message, "CONFIG_LOAD_ERROR", context)

    def get_recovery_hint(self) -> str:
        """Provide a helpful hint for fixing the load error."""
        return "Pass an existing .yaml, .yml or .json file with a mapping at the top"
