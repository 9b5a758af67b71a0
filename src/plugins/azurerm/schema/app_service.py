"""
Schema of the ``site_config`` block of an ``azurerm_app_service`` resource.

The block is list-shaped with at most one element. Each field carries its
type, its default and, where relevant, the set of values it accepts. Fields
marked *computed* have no default: when the user leaves them out the value
comes from the service and the field is reported as ``FieldState.UNSET``.
"""

import logging
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any, Self

import pydantic
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..exceptions import ValidationError
from ..network import (
    DEFAULT_SUBNET_MASK,
    encode_ip_restriction,
    mask_to_prefix_length,
)
from .suppress import case_difference

logger = logging.getLogger(__name__)

BLOCK_NAME = "site_config"

# field name -> (allowed values, case-insensitive)
ALLOWED_VALUES: dict[str, tuple[tuple[str, ...], bool]] = {
    "dotnet_framework_version": (("v2.0", "v4.0"), True),
    "java_version": (("1.7", "1.8"), False),
    "java_container": (("JETTY", "TOMCAT"), True),
    "managed_pipeline_mode": (("Classic", "Integrated"), True),
    "php_version": (("5.5", "5.6", "7.0", "7.1"), False),
    "python_version": (("2.7", "3.4"), False),
    "remote_debugging_version": (("VS2012", "VS2013", "VS2015", "VS2017"), True),
    "scm_type": (("None", "LocalGit"), False),
    "ftps_state": (("AllAllowed", "Disabled", "FtpsOnly"), False),
    "min_tls_version": (("1.0", "1.1", "1.2"), False),
}

# Fields compared with case_difference by SiteConfig.is_equivalent
CASE_INSENSITIVE_FIELDS: frozenset[str] = frozenset(
    {
        "dotnet_framework_version",
        "java_container",
        "managed_pipeline_mode",
        "remote_debugging_version",
        "scm_type",
        "ftps_state",
    }
)

_COMPUTED = {"computed": True}


class FieldState(str, Enum):
    """Presence of a site_config field."""

    UNSET = "unset"
    DEFAULT = "default"
    EXPLICIT = "explicit"


class IpRestriction(BaseModel):
    """A single ``ip_restriction`` entry as authored by the user."""

    model_config = ConfigDict(extra="forbid")

    ip_address: str = Field(
        ...,
        description="IPv4 address, or an IPv4 CIDR block when subnet_mask is empty.",
    )
    subnet_mask: str = Field(
        default=DEFAULT_SUBNET_MASK,
        description="Dotted-quad subnet mask. Defaults to a single host.",
    )

    @field_validator("ip_address")
    @classmethod
    def _validate_ip_address(cls, v: str) -> str:
        # syntax only, the pairing with subnet_mask is checked on the model
        mask = "" if "/" in v else DEFAULT_SUBNET_MASK
        encode_ip_restriction(v, mask)
        return v

    @field_validator("subnet_mask")
    @classmethod
    def _validate_subnet_mask(cls, v: str) -> str:
        if v:
            mask_to_prefix_length(v)
        return v

    @model_validator(mode="after")
    def _validate_cidr_without_mask(self) -> Self:
        if "/" in self.ip_address and self.subnet_mask:
            raise ValueError(
                f"ip_address {self.ip_address!r} is a CIDR block and requires an "
                f"empty subnet_mask, got {self.subnet_mask!r}"
            )
        return self


class SiteConfig(BaseModel):
    """User-facing ``site_config`` block."""

    model_config = ConfigDict(extra="forbid")

    always_on: bool = Field(default=False)
    default_documents: list[str] = Field(default_factory=list)
    dotnet_framework_version: str = Field(default="v4.0")
    http2_enabled: bool = Field(default=False)
    ip_restriction: list[IpRestriction] | None = Field(
        default=None, json_schema_extra=_COMPUTED
    )
    java_version: str = Field(default="")
    java_container: str = Field(default="")
    java_container_version: str = Field(default="")
    local_mysql_enabled: bool | None = Field(default=None, json_schema_extra=_COMPUTED)
    managed_pipeline_mode: str | None = Field(
        default=None, json_schema_extra=_COMPUTED
    )
    php_version: str = Field(default="")
    python_version: str = Field(default="")
    remote_debugging_enabled: bool = Field(default=False)
    remote_debugging_version: str | None = Field(
        default=None, json_schema_extra=_COMPUTED
    )
    scm_type: str = Field(default="None")
    use_32_bit_worker_process: bool | None = Field(
        default=None, json_schema_extra=_COMPUTED
    )
    websockets_enabled: bool | None = Field(default=None, json_schema_extra=_COMPUTED)
    ftps_state: str | None = Field(default=None, json_schema_extra=_COMPUTED)
    linux_fx_version: str | None = Field(default=None, json_schema_extra=_COMPUTED)
    min_tls_version: str | None = Field(default=None, json_schema_extra=_COMPUTED)
    virtual_network_name: str = Field(default="")

    @field_validator(*ALLOWED_VALUES)
    @classmethod
    def _validate_allowed_value(
        cls, v: str | None, info: pydantic.ValidationInfo
    ) -> str | None:
        if not v:
            return v
        allowed, ignore_case = ALLOWED_VALUES[info.field_name]
        if ignore_case:
            matched = v.lower() in {a.lower() for a in allowed}
        else:
            matched = v in allowed
        if not matched:
            raise ValueError(
                f"expected {info.field_name} to be one of {list(allowed)}, got {v!r}"
            )
        return v

    # ----- schema introspection --------------------------------------------

    @classmethod
    def is_computed(cls, name: str) -> bool:
        """Whether the service supplies a value when the field is left out."""
        extra = cls.model_fields[name].json_schema_extra
        return isinstance(extra, dict) and bool(extra.get("computed"))

    def field_state(self, name: str) -> FieldState:
        """Return whether a field is unset, defaulted or explicitly given."""
        if name not in type(self).model_fields:
            raise KeyError(f"Unknown site_config field: '{name}'")
        if getattr(self, name) is None:
            return FieldState.UNSET
        if name in self.model_fields_set:
            return FieldState.EXPLICIT
        return FieldState.DEFAULT

    # ----- state conversion ------------------------------------------------

    @classmethod
    def from_state(cls, value: "Sequence[Any] | SiteConfig | None") -> "Self | None":
        """
        Decode the list-shaped block handed over by the schema layer.

        Args:
            value: None, an empty list, or a one-element list holding a
                mapping (or an already decoded SiteConfig)

        Returns:
            The decoded block, or None when no block was supplied

        Raises:
            ValidationError: If the list has more than one element or a field
                fails validation
        """
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            value = [value]
        if len(value) == 0:
            return None
        if len(value) > 1:
            raise ValidationError(
                f"{BLOCK_NAME} accepts at most one block, got {len(value)}",
                field_name=BLOCK_NAME,
                actual_value=len(value),
            )

        raw = value[0]
        if isinstance(raw, cls):
            return raw
        if raw is None:
            raw = {}
        if not isinstance(raw, Mapping):
            raise ValidationError(
                f"{BLOCK_NAME} block must be a mapping",
                field_name=f"{BLOCK_NAME}.0",
                expected_type=dict,
                actual_value=type(raw).__name__,
            )

        try:
            return cls.model_validate(dict(raw))
        except pydantic.ValidationError as e:
            first = e.errors()[0]
            path = ".".join(str(part) for part in (BLOCK_NAME, 0, *first["loc"]))
            logger.debug(f"{BLOCK_NAME} failed validation: {e}")
            raise ValidationError(
                f"Invalid {path}: {first['msg']}",
                field_name=path,
                actual_value=first.get("input"),
            ) from e

    def to_state(self) -> dict[str, Any]:
        """Dump the fields that were supplied, in the schema layer's shape."""
        return self.model_dump(exclude_unset=True)

    # ----- comparison ------------------------------------------------------

    def is_equivalent(self, other: "SiteConfig") -> bool:
        """
        Compare two blocks, ignoring case differences on enum-valued fields.
        """
        for name in type(self).model_fields:
            old, new = getattr(self, name), getattr(other, name)
            if name == "ip_restriction":
                old = [(r.ip_address, r.subnet_mask) for r in old or []]
                new = [(r.ip_address, r.subnet_mask) for r in new or []]
            if name in CASE_INSENSITIVE_FIELDS:
                if not case_difference(name, old, new):
                    return False
            elif old != new:
                return False
        return True
