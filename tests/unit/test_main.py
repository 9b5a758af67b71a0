"""Unit tests for the command-line interface."""

import json
from pathlib import Path

import pytest

from src.core import block_registry
from src.core.block_registry import BlockMapperRegistry, get_global_registry
from src.main import expand_document, flatten_document, main
from src.plugins.azurerm.exceptions import RemoteDataError
from src.plugins.azurerm.loader import load_document

SITE_YAML = """\
site_config:
  - always_on: true
    default_documents:
      - index.html
    managed_pipeline_mode: integrated
    ip_restriction:
      - ip_address: 10.0.0.0
        subnet_mask: 255.255.255.0
      - ip_address: 192.168.1.5
"""


@pytest.fixture
def empty_registry(monkeypatch: pytest.MonkeyPatch) -> BlockMapperRegistry:
    """Swap in a registry with nothing registered."""
    registry = BlockMapperRegistry()
    monkeypatch.setattr(block_registry, "_global_registry", registry)
    return registry


@pytest.fixture
def site_file(tmp_path: Path) -> Path:
    path = tmp_path / "site.yaml"
    path.write_text(SITE_YAML, encoding="utf-8")
    return path


@pytest.mark.usefixtures("empty_registry")
class TestDocuments:
    def test_helpers_register_builtin_mappers(self) -> None:
        assert get_global_registry().get_available_blocks() == []
        expand_document({}, "site_config")
        assert get_global_registry().get_available_blocks() == ["site_config"]

    def test_expand_document(self) -> None:
        result = expand_document(
            {"site_config": [{"ip_restriction": [{"ip_address": "1.2.3.4"}]}]},
            "site_config",
        )
        assert result["properties"]["siteConfig"]["ipSecurityRestrictions"] == [
            {"ipAddress": "1.2.3.4/32", "subnetMask": ""}
        ]

    def test_expand_without_block(self) -> None:
        assert expand_document({}, "site_config") == {
            "properties": {
                "siteConfig": {"defaultDocuments": [], "ipSecurityRestrictions": []}
            }
        }

    def test_flatten_document(self) -> None:
        result = flatten_document(
            {"properties": {"siteConfig": {"alwaysOn": False}}}, "site_config"
        )
        assert result["site_config"][0]["always_on"] is False

    def test_flatten_invalid_payload(self) -> None:
        with pytest.raises(RemoteDataError) as exc:
            flatten_document({"alwaysOn": "sometimes"}, "site_config")
        assert exc.value.field_name == "alwaysOn"

    def test_flatten_keeps_unknown_enum_values(self) -> None:
        result = flatten_document({"scmType": "VSTSRM"}, "site_config")
        assert result["site_config"][0]["scm_type"] == "VSTSRM"


class TestMain:
    def test_expand_to_stdout(
        self, site_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["expand", str(site_file)]) == 0
        payload = json.loads(capsys.readouterr().out)
        site_config = payload["properties"]["siteConfig"]
        assert site_config["alwaysOn"] is True
        assert site_config["managedPipelineMode"] == "Integrated"
        assert site_config["ipSecurityRestrictions"] == [
            {"ipAddress": "10.0.0.0/24", "subnetMask": ""},
            {"ipAddress": "192.168.1.5/32", "subnetMask": ""},
        ]

    def test_expand_then_flatten_files(self, site_file: Path, tmp_path: Path) -> None:
        wire_file = tmp_path / "out" / "wire.json"
        flat_file = tmp_path / "out" / "flat.yaml"
        assert main(["expand", str(site_file), "-o", str(wire_file)]) == 0
        assert main(["flatten", str(wire_file), "-o", str(flat_file)]) == 0

        (block,) = load_document(flat_file)["site_config"]
        assert block["always_on"] is True
        assert block["default_documents"] == ["index.html"]
        assert block["managed_pipeline_mode"] == "Integrated"
        assert block["ip_restriction"] == [
            {"ip_address": "10.0.0.0", "subnet_mask": "255.255.255.0"},
            {"ip_address": "192.168.1.5", "subnet_mask": "255.255.255.255"},
        ]

    def test_flatten_json_format(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        wire_file = tmp_path / "wire.json"
        wire_file.write_text(json.dumps({"scmType": "LocalGit"}), encoding="utf-8")
        assert main(["flatten", str(wire_file), "--format", "json"]) == 0
        out = json.loads(capsys.readouterr().out)
        assert out["site_config"][0]["scm_type"] == "LocalGit"

    def test_validation_error_exit_code(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("site_config:\n  - php_version: '8.0'\n", encoding="utf-8")
        assert main(["expand", str(path)]) == 1

    def test_non_contiguous_mask_exit_code(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text(
            "site_config:\n"
            "  - ip_restriction:\n"
            "      - ip_address: 10.0.0.0\n"
            "        subnet_mask: 255.0.255.0\n",
            encoding="utf-8",
        )
        assert main(["expand", str(path)]) == 1

    def test_remote_data_error_exit_code(self, tmp_path: Path) -> None:
        path = tmp_path / "wire.json"
        path.write_text(
            json.dumps({"ipSecurityRestrictions": [{"ipAddress": "1.2.3.4/99"}]}),
            encoding="utf-8",
        )
        assert main(["flatten", str(path)]) == 2

    def test_load_error_exit_code(self, tmp_path: Path) -> None:
        assert main(["expand", str(tmp_path / "missing.yaml")]) == 3

    @pytest.mark.usefixtures("empty_registry")
    def test_main_registers_builtin_mappers(
        self, site_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["expand", str(site_file), "--block", "site_config"]) == 0
        assert "siteConfig" in capsys.readouterr().out

    def test_unknown_block_is_rejected(self, site_file: Path) -> None:
        with pytest.raises(SystemExit):
            main(["expand", str(site_file), "--block", "nope"])
