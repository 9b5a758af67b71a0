"""Unit tests for the YAML / JSON document loader."""

import json
from pathlib import Path

import pytest

from src.plugins.azurerm.exceptions import ConfigLoadError
from src.plugins.azurerm.loader import load_document, render_document, save_document


class TestLoadDocument:
    def test_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "site.yaml"
        path.write_text(
            "site_config:\n"
            "  - always_on: true\n"
            "    ip_restriction:\n"
            "      - ip_address: 10.0.0.0\n"
            "        subnet_mask: 255.255.255.0\n",
            encoding="utf-8",
        )
        data = load_document(path)
        assert data["site_config"][0]["always_on"] is True
        assert data["site_config"][0]["ip_restriction"][0] == {
            "ip_address": "10.0.0.0",
            "subnet_mask": "255.255.255.0",
        }

    def test_json(self, tmp_path: Path) -> None:
        path = tmp_path / "site.json"
        path.write_text(json.dumps({"alwaysOn": True}), encoding="utf-8")
        assert load_document(str(path)) == {"alwaysOn": True}

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigLoadError) as exc:
            load_document(tmp_path / "nope.yaml")
        assert "File not found" in str(exc.value)

    def test_unsupported_extension(self, tmp_path: Path) -> None:
        path = tmp_path / "site.toml"
        path.write_text("x = 1", encoding="utf-8")
        with pytest.raises(ConfigLoadError) as exc:
            load_document(path)
        assert "Unsupported extension" in str(exc.value)

    def test_parse_error(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigLoadError) as exc:
            load_document(path)
        assert exc.value.__cause__ is not None

    def test_top_level_must_be_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigLoadError) as exc:
            load_document(path)
        assert "mapping" in str(exc.value)


class TestRenderAndSave:
    def test_json(self) -> None:
        text = render_document({"a": [1, 2]}, "json")
        assert json.loads(text) == {"a": [1, 2]}
        assert text.endswith("\n")

    def test_yaml_round_trip(self, tmp_path: Path) -> None:
        data = {"site_config": [{"scm_type": "None", "default_documents": ["a"]}]}
        path = tmp_path / "out" / "site.yaml"
        save_document(render_document(data, "yaml"), path)
        assert load_document(path) == data

    def test_unknown_format(self) -> None:
        with pytest.raises(ValueError):
            render_document({}, "toml")
