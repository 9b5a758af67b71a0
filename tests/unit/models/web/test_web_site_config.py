"""Unit tests for the Web Apps API SiteConfig models."""

import pytest
from pydantic import ValidationError

from src.models.web import (
    FtpsState,
    IpSecurityRestriction,
    ManagedPipelineMode,
    ScmType,
    SiteConfig,
    SupportedTlsVersions,
)


class TestEnums:
    def test_case_insensitive_lookup(self):
        assert ManagedPipelineMode("classic") is ManagedPipelineMode.CLASSIC
        assert ScmType("LOCALGIT") is ScmType.LOCAL_GIT
        assert FtpsState("ftpsonly") is FtpsState.FTPS_ONLY

    def test_unknown_value(self):
        with pytest.raises(ValueError):
            ManagedPipelineMode("Hybrid")

    def test_str_is_value(self):
        assert str(SupportedTlsVersions.ONE_FULL_STOP_TWO) == "1.2"
        assert str(ScmType.NONE) == "None"


class TestSiteConfigDefaults:
    def test_everything_absent(self):
        s = SiteConfig()
        assert all(v is None for v in s.model_dump().values())
        assert s.to_wire() == {}


class TestSiteConfigWire:
    def test_aliases(self):
        s = SiteConfig.from_wire(
            {
                "alwaysOn": True,
                "http20Enabled": True,
                "use32BitWorkerProcess": False,
                "localMySqlEnabled": True,
                "vnetName": "vnet",
                "netFrameworkVersion": "v4.0",
            }
        )
        assert s.always_on is True
        assert s.http20_enabled is True
        assert s.use32_bit_worker_process is False
        assert s.local_my_sql_enabled is True
        assert s.vnet_name == "vnet"
        assert s.net_framework_version == "v4.0"

    def test_populate_by_name(self):
        s = SiteConfig(web_sockets_enabled=True)
        assert s.to_wire() == {"webSocketsEnabled": True}

    def test_enum_fields_canonicalized(self):
        s = SiteConfig.from_wire(
            {
                "managedPipelineMode": "INTEGRATED",
                "scmType": "none",
                "ftpsState": "allallowed",
                "minTlsVersion": "1.0",
            }
        )
        assert s.managed_pipeline_mode is ManagedPipelineMode.INTEGRATED
        assert s.scm_type is ScmType.NONE
        assert s.ftps_state is FtpsState.ALL_ALLOWED
        assert s.min_tls_version is SupportedTlsVersions.ONE_FULL_STOP_ZERO
        assert s.to_wire() == {
            "managedPipelineMode": "Integrated",
            "scmType": "None",
            "ftpsState": "AllAllowed",
            "minTlsVersion": "1.0",
        }

    def test_unknown_enum_values_pass_through(self):
        s = SiteConfig.from_wire({"minTlsVersion": "1.3", "scmType": "GitHubAction"})
        assert s.min_tls_version == "1.3"
        assert not isinstance(s.min_tls_version, SupportedTlsVersions)
        assert s.scm_type == "GitHubAction"
        assert s.to_wire() == {"minTlsVersion": "1.3", "scmType": "GitHubAction"}

    def test_vstsrm_scm_type(self):
        assert SiteConfig.from_wire({"scmType": "vstsrm"}).scm_type is ScmType.VSTSRM

    def test_invalid_scalar_rejected(self):
        with pytest.raises(ValidationError):
            SiteConfig.from_wire({"alwaysOn": "sometimes"})

    def test_unknown_keys_ignored(self):
        s = SiteConfig.from_wire({"numberOfWorkers": 1, "alwaysOn": False})
        assert s.to_wire() == {"alwaysOn": False}

    def test_envelopes(self):
        bare = {"phpVersion": "7.1"}
        assert SiteConfig.from_wire({"properties": bare}).php_version == "7.1"
        assert (
            SiteConfig.from_wire({"properties": {"siteConfig": bare}}).php_version
            == "7.1"
        )

    def test_restrictions(self):
        s = SiteConfig.from_wire(
            {"ipSecurityRestrictions": [{"ipAddress": "1.2.3.4/32", "subnetMask": ""}]}
        )
        assert s.ip_security_restrictions == [
            IpSecurityRestriction(ip_address="1.2.3.4/32", subnet_mask="")
        ]
        assert s.to_wire()["ipSecurityRestrictions"] == [
            {"ipAddress": "1.2.3.4/32", "subnetMask": ""}
        ]
