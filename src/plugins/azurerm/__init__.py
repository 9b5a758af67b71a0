"""AzureRM plugin: App Service site_config expand/flatten."""

from .mappers.app_service_site_config import (
    AppServiceSiteConfigMapper,
    expand_app_service_site_config,
    flatten_app_service_site_config,
)
from .network import decode_ip_restriction, encode_ip_restriction

__all__ = [
    "AppServiceSiteConfigMapper",
    "expand_app_service_site_config",
    "flatten_app_service_site_config",
    "encode_ip_restriction",
    "decode_ip_restriction",
]
