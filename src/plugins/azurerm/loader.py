"""Read and write site_config documents as local YAML / JSON files."""

from __future__ import annotations

import json
import logging
from io import StringIO
from pathlib import Path
from typing import Any, Final

from ruamel.yaml import YAML

from .exceptions import ConfigLoadError

logger = logging.getLogger(__name__)

_YAML_EXTS: Final[set[str]] = {".yaml", ".yml"}
_JSON_EXTS: Final[set[str]] = {".json"}

SUPPORTED_EXTS: Final[set[str]] = _YAML_EXTS | _JSON_EXTS
OUTPUT_FORMATS: Final[tuple[str, ...]] = ("json", "yaml")

_yaml_parser = YAML(typ="safe")  # safe loader, YAML 1.2


def _yaml_dumper() -> YAML:
    yaml = YAML()
    yaml.indent(mapping=2, sequence=4, offset=2)
    yaml.default_flow_style = False
    yaml.allow_unicode = True
    yaml.width = 4096
    return yaml


def load_document(path: str | Path) -> dict[str, Any]:
    """
    Read a YAML or JSON document from disk.

    Raises:
        ConfigLoadError: If the file is missing, has an unsupported
            extension, cannot be parsed, or is not a mapping at the top level
    """
    file_path = Path(path)

    if not file_path.exists():
        logger.error("File not found: %s", file_path)
        raise ConfigLoadError(f"File not found: {file_path}", path=str(file_path))

    if file_path.suffix.lower() not in SUPPORTED_EXTS:
        raise ConfigLoadError(
            f"Unsupported extension '{file_path.suffix}'. "
            f"Supported: {', '.join(sorted(SUPPORTED_EXTS))}",
            path=str(file_path),
        )

    raw_text = file_path.read_text(encoding="utf-8")

    try:
        if file_path.suffix.lower() in _YAML_EXTS:
            data = _yaml_parser.load(raw_text)
        else:  # .json
            data = json.loads(raw_text)
    except Exception as exc:
        raise ConfigLoadError(
            f"Cannot parse {file_path.name}: {exc}", path=str(file_path)
        ) from exc

    if not isinstance(data, dict):
        raise ConfigLoadError(
            "Top-level object must be a mapping", path=str(file_path)
        )

    logger.debug("Document loaded (%d root keys)", len(data))
    return data


def render_document(data: dict[str, Any], fmt: str = "json") -> str:
    """Serialize a document as JSON or YAML text."""
    if fmt == "json":
        return json.dumps(data, indent=2) + "\n"
    if fmt == "yaml":
        stream = StringIO()
        _yaml_dumper().dump(data, stream)
        return stream.getvalue()
    raise ValueError(f"Unsupported output format '{fmt}'. Use one of {OUTPUT_FORMATS}")


def save_document(content: str, path: str | Path) -> None:
    """Write rendered content to a file, creating parent directories."""
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(content, encoding="utf-8")
    logger.info(f"Document saved to: {file_path}")
