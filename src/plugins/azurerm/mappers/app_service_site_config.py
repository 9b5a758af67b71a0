"""
Expand and flatten the ``site_config`` block of ``azurerm_app_service``.

``expand`` turns the user-facing block into the Web Apps API ``SiteConfig``;
``flatten`` turns a ``SiteConfig`` returned by the API back into the block.
"""

import logging
from collections.abc import Sequence
from typing import Any

from src.models import web

from ..exceptions import (
    InvalidNetworkLiteral,
    InvalidSubnetMask,
    RemoteDataError,
    ValidationError,
)
from ..network import decode_ip_restriction, encode_ip_restriction
from ..schema.app_service import BLOCK_NAME, FieldState, IpRestriction, SiteConfig

logger = logging.getLogger(__name__)

# user field -> wire field, for values copied as they are
_SCALAR_FIELDS: dict[str, str] = {
    "always_on": "always_on",
    "dotnet_framework_version": "net_framework_version",
    "java_version": "java_version",
    "java_container": "java_container",
    "java_container_version": "java_container_version",
    "linux_fx_version": "linux_fx_version",
    "http2_enabled": "http20_enabled",
    "local_mysql_enabled": "local_my_sql_enabled",
    "php_version": "php_version",
    "python_version": "python_version",
    "remote_debugging_enabled": "remote_debugging_enabled",
    "remote_debugging_version": "remote_debugging_version",
    "use_32_bit_worker_process": "use32_bit_worker_process",
    "websockets_enabled": "web_sockets_enabled",
    "virtual_network_name": "vnet_name",
}

# user field -> wire enum; flatten always emits these, "" when absent
_ENUM_FIELDS: dict[str, type[web.WebEnum]] = {
    "managed_pipeline_mode": web.ManagedPipelineMode,
    "scm_type": web.ScmType,
    "ftps_state": web.FtpsState,
    "min_tls_version": web.SupportedTlsVersions,
}

_IP_RESTRICTION_PATH = f"{BLOCK_NAME}.0.ip_restriction"


def _expand_ip_restrictions(
    restrictions: Sequence[IpRestriction],
) -> list[web.IpSecurityRestriction]:
    expanded = []
    for index, restriction in enumerate(restrictions):
        try:
            cidr = encode_ip_restriction(
                restriction.ip_address, restriction.subnet_mask
            )
        except InvalidSubnetMask as e:
            raise ValidationError(
                f"Invalid subnet mask in ip_restriction {index}: {e}",
                field_name=f"{_IP_RESTRICTION_PATH}.{index}.subnet_mask",
                actual_value=e.literal,
            ) from e
        except InvalidNetworkLiteral as e:
            raise ValidationError(
                f"Invalid IP address in ip_restriction {index}: {e}",
                field_name=f"{_IP_RESTRICTION_PATH}.{index}.ip_address",
                actual_value=e.literal,
            ) from e

        expanded.append(web.IpSecurityRestriction(ip_address=cidr, subnet_mask=""))
    return expanded


def _flatten_ip_restrictions(
    restrictions: Sequence[web.IpSecurityRestriction],
) -> list[IpRestriction]:
    flattened = []
    for index, restriction in enumerate(restrictions):
        fields_set = {"subnet_mask"}
        ip_address, subnet_mask = "", restriction.subnet_mask or ""

        if restriction.ip_address is not None:
            fields_set.add("ip_address")
            try:
                ip_address, subnet_mask = decode_ip_restriction(
                    restriction.ip_address, restriction.subnet_mask
                )
            except InvalidNetworkLiteral as e:
                raise RemoteDataError(
                    f"Cannot decode ipAddress of ip_restriction {index}: {e}",
                    field_name=f"{_IP_RESTRICTION_PATH}.{index}.ip_address",
                    actual_value=e.literal,
                ) from e

        flattened.append(
            IpRestriction.model_construct(
                _fields_set=fields_set, ip_address=ip_address, subnet_mask=subnet_mask
            )
        )
    return flattened


def expand_app_service_site_config(
    state: "Sequence[Any] | SiteConfig | None",
) -> web.SiteConfig:
    """
    Expand the user-facing site_config block into the API's SiteConfig.

    Fields that hold a value, whether given by the user or defaulted by the
    schema, are copied; computed fields the user left out are omitted so the
    service keeps its own value. Both list fields are always sent.

    Args:
        state: The block as stored by the schema layer (a list with at most
            one mapping), a decoded SiteConfig, or None

    Returns:
        The wire-level SiteConfig

    Raises:
        ValidationError: If the block fails validation or an ip_restriction
            entry holds a malformed address or mask
    """
    config = SiteConfig.from_state(state)
    if config is None:
        logger.debug(f"No {BLOCK_NAME} block supplied, using service defaults")
        return web.SiteConfig(default_documents=[], ip_security_restrictions=[])

    values: dict[str, Any] = {
        "default_documents": list(config.default_documents or []),
        "ip_security_restrictions": _expand_ip_restrictions(
            config.ip_restriction or []
        ),
    }

    for name, wire_name in _SCALAR_FIELDS.items():
        if config.field_state(name) is FieldState.UNSET:
            continue
        values[wire_name] = getattr(config, name)

    for name, enum_type in _ENUM_FIELDS.items():
        value = getattr(config, name)
        # the zero value of a wire enum is "absent"
        if not value:
            continue
        values[name] = enum_type(value)

    logger.debug(f"Expanded {BLOCK_NAME} fields: {sorted(values)}")
    return web.SiteConfig(**values)


def flatten_app_service_site_config(
    site_config: web.SiteConfig | None,
) -> list[SiteConfig]:
    """
    Flatten the API's SiteConfig into the user-facing site_config block.

    Absent wire fields stay unset on the block instead of taking a zero
    value. ``default_documents`` and ``ip_restriction`` are always lists, and
    the four enum fields are always strings ("" when absent).

    Args:
        site_config: The SiteConfig returned by the API, or None

    Returns:
        A one-element list holding the block, or an empty list for None

    Raises:
        RemoteDataError: If an ip restriction cannot be decoded
    """
    if site_config is None:
        logger.debug("SiteConfig is nil")
        return []

    values: dict[str, Any] = dict.fromkeys(SiteConfig.model_fields)
    fields_set = {"default_documents", "ip_restriction", *_ENUM_FIELDS}

    for name, wire_name in _SCALAR_FIELDS.items():
        value = getattr(site_config, wire_name)
        if value is not None:
            values[name] = value
            fields_set.add(name)

    values["default_documents"] = list(site_config.default_documents or [])
    values["ip_restriction"] = _flatten_ip_restrictions(
        site_config.ip_security_restrictions or []
    )

    for name in _ENUM_FIELDS:
        value = getattr(site_config, name)
        values[name] = str(value) if value is not None else ""

    return [SiteConfig.model_construct(_fields_set=fields_set, **values)]


class AppServiceSiteConfigMapper:
    """Block mapper for the App Service ``site_config`` block."""

    block_name = BLOCK_NAME

    def __init__(self):
        self._logger = logger.getChild(self.__class__.__name__)

    def expand(self, state: Any) -> web.SiteConfig:
        """Expand the stored block into the wire SiteConfig."""
        self._logger.info(f"Expanding '{self.block_name}' block")
        return expand_app_service_site_config(state)

    def flatten(self, remote: web.SiteConfig | None) -> list[SiteConfig]:
        """Flatten a wire SiteConfig into the stored block."""
        self._logger.info(f"Flattening '{self.block_name}' block")
        return flatten_app_service_site_config(remote)

    def parse_remote(self, payload: dict[str, Any]) -> web.SiteConfig:
        """Parse a SiteConfig payload (bare or site envelope) from the API."""
        return web.SiteConfig.from_wire(payload)
