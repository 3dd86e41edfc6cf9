"""Configuration loading for annodoc (.annodoc.yml)."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml

from .codegen.emitter import DEFAULT_PRELUDE

CONFIG_NAME = ".annodoc.yml"

_VERSION_PATTERN = re.compile(r"^(\d+)\.(\d+)$")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class CodegenConfig:
    """Code generation settings from the ``codegen`` section."""

    prelude: List[str] = field(default_factory=lambda: list(DEFAULT_PRELUDE))
    feature_version: Optional[Tuple[int, int]] = None
    example_prefix: str = "_example"


@dataclass
class AnnodocConfig:
    """Represents the settings defined in .annodoc.yml."""

    root: Path
    codegen: CodegenConfig = field(default_factory=CodegenConfig)


def load_config(config_path: Path) -> AnnodocConfig:
    """Load configuration from ``config_path``.

    ``config_path`` may be the configuration file itself, the directory
    holding it, or an input file whose sibling ``.annodoc.yml`` applies.
    """
    config_file = _resolve_config_path(config_path)
    root = config_file.parent

    if not config_file.exists():
        return AnnodocConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    codegen = CodegenConfig()
    codegen_data = _as_dict(data.get("codegen"))
    if "prelude" in codegen_data:
        codegen.prelude = _as_str_list(codegen_data.get("prelude"))
    if codegen_data.get("feature_version") is not None:
        codegen.feature_version = _as_version(codegen_data["feature_version"])
    prefix = _as_str(codegen_data.get("example_prefix"))
    if prefix:
        if not prefix.isidentifier():
            raise ConfigError(f"codegen.example_prefix is not an identifier: {prefix!r}")
        codegen.example_prefix = prefix

    return AnnodocConfig(root=root, codegen=codegen)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser().resolve()
    if config_path.is_dir():
        return config_path / CONFIG_NAME
    if config_path.suffix in {".yml", ".yaml"}:
        return config_path
    return config_path.parent / CONFIG_NAME


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


def _as_version(value: Any) -> Tuple[int, int]:
    # YAML reads an unquoted 3.10 as the float 3.1
    if isinstance(value, float):
        raise ConfigError("codegen.feature_version must be quoted, e.g. \"3.10\"")
    match = _VERSION_PATTERN.match(str(value).strip())
    if not match:
        raise ConfigError(f"codegen.feature_version must look like \"3.8\", got {value!r}")
    return int(match.group(1)), int(match.group(2))


__all__ = ["AnnodocConfig", "CONFIG_NAME", "CodegenConfig", "ConfigError", "load_config"]
