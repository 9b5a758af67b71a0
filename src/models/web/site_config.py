from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from .enums import (
    FtpsState,
    ManagedPipelineMode,
    ScmType,
    SupportedTlsVersions,
    WebEnum,
)

_ENUM_TYPES: dict[str, type[WebEnum]] = {
    "managed_pipeline_mode": ManagedPipelineMode,
    "scm_type": ScmType,
    "ftps_state": FtpsState,
    "min_tls_version": SupportedTlsVersions,
}


class WebBase(BaseModel):
    """
    Base class for Web Apps API (2018-02-01) payload models.

    Python attribute names are snake_case, the JSON keys are the API's
    camelCase names. Keys this package does not model are ignored.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_wire(self) -> dict[str, Any]:
        """Dump to API JSON, leaving out absent (None) fields."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class IpSecurityRestriction(WebBase):
    """
    IP security restriction of a site.

    The API takes the address in CIDR notation and a blank subnet mask.
    """

    ip_address: str | None = Field(
        default=None,
        alias="ipAddress",
        description="IP address in CIDR notation, e.g. '10.0.0.0/24'.",
    )
    subnet_mask: str | None = Field(
        default=None,
        alias="subnetMask",
        description="Legacy subnet mask; sent empty by this client.",
    )


class SiteConfig(WebBase):
    """
    Configuration of an App Service site (``properties.siteConfig``).

    Enum-valued fields hold the canonical member when the value is known and
    the raw string otherwise, so payloads from newer API versions still load.
    """

    always_on: bool | None = Field(default=None, alias="alwaysOn")
    default_documents: list[str] | None = Field(
        default=None, alias="defaultDocuments"
    )
    net_framework_version: str | None = Field(
        default=None, alias="netFrameworkVersion"
    )
    http20_enabled: bool | None = Field(default=None, alias="http20Enabled")
    ip_security_restrictions: list[IpSecurityRestriction] | None = Field(
        default=None, alias="ipSecurityRestrictions"
    )
    java_version: str | None = Field(default=None, alias="javaVersion")
    java_container: str | None = Field(default=None, alias="javaContainer")
    java_container_version: str | None = Field(
        default=None, alias="javaContainerVersion"
    )
    local_my_sql_enabled: bool | None = Field(default=None, alias="localMySqlEnabled")
    managed_pipeline_mode: ManagedPipelineMode | str | None = Field(
        default=None, alias="managedPipelineMode", union_mode="left_to_right"
    )
    php_version: str | None = Field(default=None, alias="phpVersion")
    python_version: str | None = Field(default=None, alias="pythonVersion")
    remote_debugging_enabled: bool | None = Field(
        default=None, alias="remoteDebuggingEnabled"
    )
    remote_debugging_version: str | None = Field(
        default=None, alias="remoteDebuggingVersion"
    )
    scm_type: ScmType | str | None = Field(
        default=None, alias="scmType", union_mode="left_to_right"
    )
    use32_bit_worker_process: bool | None = Field(
        default=None, alias="use32BitWorkerProcess"
    )
    web_sockets_enabled: bool | None = Field(default=None, alias="webSocketsEnabled")
    ftps_state: FtpsState | str | None = Field(
        default=None, alias="ftpsState", union_mode="left_to_right"
    )
    linux_fx_version: str | None = Field(default=None, alias="linuxFxVersion")
    min_tls_version: SupportedTlsVersions | str | None = Field(
        default=None, alias="minTlsVersion", union_mode="left_to_right"
    )
    vnet_name: str | None = Field(default=None, alias="vnetName")

    @field_validator(
        "managed_pipeline_mode",
        "scm_type",
        "ftps_state",
        "min_tls_version",
        mode="before",
    )
    @classmethod
    def _canonical_enum(cls, v: Any, info: ValidationInfo) -> Any:
        # resolve case variants to the canonical member; values the API
        # added later stay plain strings
        if isinstance(v, str) and not isinstance(v, WebEnum):
            enum_type = _ENUM_TYPES[info.field_name]
            try:
                return enum_type(v)
            except ValueError:
                return v
        return v

    @classmethod
    def from_wire(cls, payload: dict[str, Any]) -> "SiteConfig":
        """
        Build a SiteConfig from API JSON.

        Accepts either the bare siteConfig object or a site envelope of the
        form ``{"properties": {...}}`` / ``{"properties": {"siteConfig": {...}}}``.
        """
        body = payload.get("properties", payload)
        if isinstance(body, dict) and isinstance(body.get("siteConfig"), dict):
            body = body["siteConfig"]
        return cls.model_validate(body)
