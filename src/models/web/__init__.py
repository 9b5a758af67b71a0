from .enums import (
    FtpsState,
    ManagedPipelineMode,
    ScmType,
    SupportedTlsVersions,
    WebEnum,
)
from .site_config import IpSecurityRestriction, SiteConfig, WebBase

__all__ = [
    "WebBase",
    "WebEnum",
    "FtpsState",
    "ManagedPipelineMode",
    "ScmType",
    "SupportedTlsVersions",
    "IpSecurityRestriction",
    "SiteConfig",
]
