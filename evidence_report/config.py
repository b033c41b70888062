"""
Report configuration assembly and file loading.

Callers usually hand over a partial configuration (a mapping with only the
fields they care about). ``build_report_config`` merges it over the
defaults, applies the environment overrides and validates the result.
Configuration files, evidence manifests and custom templates can be
written in YAML or JSON; the format is chosen by file suffix.

Environment variables:
    EVIDENCE_REPORT_THEME   default theme key when none is supplied
    EVIDENCE_REPORT_AUTHOR  default author when none is supplied
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml
from pydantic import ValidationError

from evidence_report.models import CustomTemplate, EvidenceItem, ReportConfig, TemplateId
from evidence_report.utils.exceptions import ConfigError

logger = logging.getLogger(__name__)

ENV_THEME = "EVIDENCE_REPORT_THEME"
ENV_AUTHOR = "EVIDENCE_REPORT_AUTHOR"

DEFAULT_AUTHOR = "QA Engineer"
DEFAULT_THEME = "default"

_TEMPLATE_ID_KEYS = ("template_id", "templateId")


@dataclass
class EvidenceManifest:
    """Evidence list plus the report settings stored alongside it."""
    evidence: List[EvidenceItem]
    config: Dict[str, Any] = field(default_factory=dict)
    base_dir: Path = field(default_factory=Path.cwd)


def _drop_unset(partial: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in partial.items() if value is not None}


def _known_template_id(data: Dict[str, Any]) -> None:
    """Unknown template ids fall back to the legacy layout selection."""
    valid = {t.value for t in TemplateId}
    for key in _TEMPLATE_ID_KEYS:
        value = data.get(key)
        if value is None or isinstance(value, TemplateId):
            continue
        if str(value).lower() not in valid:
            logger.warning("Unknown template id %r; falling back to layout selection", value)
            data.pop(key)
        else:
            data[key] = str(value).lower()


def build_report_config(
    partial: Optional[Union[ReportConfig, Mapping[str, Any]]] = None,
    author_name: Optional[str] = None,
) -> ReportConfig:
    """
    Merge a partial configuration over the defaults.

    Author precedence: explicit ``author`` in the partial config, then
    ``author_name``, then ``EVIDENCE_REPORT_AUTHOR``, then the default.

    Raises:
        ConfigError: If the merged configuration does not validate
    """
    if isinstance(partial, ReportConfig):
        return partial

    data = _drop_unset(partial or {})
    _known_template_id(data)

    if "theme" not in data:
        data["theme"] = os.environ.get(ENV_THEME) or DEFAULT_THEME
    if not data.get("author"):
        data["author"] = author_name or os.environ.get(ENV_AUTHOR) or DEFAULT_AUTHOR

    try:
        return ReportConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"{exc.error_count()} invalid field(s)", cause=exc) from exc


def _read_structured_file(path: Union[str, Path]) -> Any:
    path = Path(path)
    if not path.exists():
        raise ConfigError("file not found", source=str(path))

    suffix = path.suffix.lower()
    try:
        with open(path, "r", encoding="utf-8") as f:
            if suffix in [".yaml", ".yml"]:
                return yaml.safe_load(f)
            elif suffix == ".json":
                return json.load(f)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigError("file could not be parsed", source=str(path), cause=exc) from exc
    raise ConfigError(f"unsupported file format '{suffix}'", source=str(path))


def load_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a partial report configuration from YAML or JSON."""
    data = _read_structured_file(path)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("configuration file must contain a mapping", source=str(path))
    return data


def load_evidence_manifest(path: Union[str, Path]) -> EvidenceManifest:
    """
    Read an evidence manifest.

    The file holds either a plain list of evidence items or a mapping with
    an ``evidence`` list and an optional ``config`` mapping. Image
    references in the manifest are resolved relative to its directory.
    """
    path = Path(path)
    data = _read_structured_file(path)

    if isinstance(data, list):
        raw_items, config = data, {}
    elif isinstance(data, dict):
        raw_items = data.get("evidence") or []
        config = data.get("config") or {}
    else:
        raise ConfigError("manifest must be a list or a mapping", source=str(path))

    if not isinstance(config, dict):
        raise ConfigError("manifest 'config' must be a mapping", source=str(path))

    try:
        evidence = [EvidenceItem.model_validate(item) for item in raw_items]
    except ValidationError as exc:
        raise ConfigError("invalid evidence item", source=str(path), cause=exc) from exc

    logger.info("Loaded %d evidence items from %s", len(evidence), path)
    return EvidenceManifest(evidence=evidence, config=config, base_dir=path.parent.resolve())


def load_custom_template(path: Union[str, Path]) -> CustomTemplate:
    """Read a custom template (bare, or under a ``customTemplate`` key)."""
    data = _read_structured_file(path)
    if isinstance(data, dict):
        data = data.get("customTemplate", data.get("custom_template", data))
    try:
        return CustomTemplate.model_validate(data)
    except ValidationError as exc:
        raise ConfigError("invalid custom template", source=str(path), cause=exc) from exc
