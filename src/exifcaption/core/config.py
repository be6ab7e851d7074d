"""Configuration helpers for the caption tools."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

import tomllib
from PIL import Image

from .capabilities import normalise_format

logger = logging.getLogger(__name__)

_CONFIG_ENV_PREFIX = "EXIFCAPTION__"
_FALLBACK_FORMAT = "PNG"


def _find_pyproject(start: Optional[Path] = None) -> Optional[Path]:
    """Locate the closest ``pyproject.toml`` relative to *start*."""

    current = (start or Path.cwd()).resolve()
    for candidate in [current, *current.parents]:
        pyproject = candidate / "pyproject.toml"
        if pyproject.exists():
            return pyproject
    return None


def _coerce_bool(value: object, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off"}:
            return False
    return default


def _as_path(value: object) -> Optional[Path]:
    if value is None:
        return None
    if isinstance(value, Path):
        return value
    if isinstance(value, str) and value.strip():
        return Path(value).expanduser()
    return None


def _as_format(value: object) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return normalise_format(value)
    return None


def format_for_path(path: Path) -> str:
    """Pillow format name registered for the suffix of *path*."""

    return Image.registered_extensions().get(path.suffix.lower(), _FALLBACK_FORMAT)


@dataclass(frozen=True)
class CaptionSettings:
    """Default values sourced from project metadata and the environment."""

    default_source: Optional[Path] = None
    default_destination: Optional[Path] = None
    default_composite: bool = False
    default_image_format: Optional[str] = None


@dataclass(frozen=True)
class CaptionConfig:
    """Fully resolved runtime configuration for one invocation."""

    source: Path
    destination: Optional[Path]
    composite: bool
    image_format: str


def _load_pyproject_settings(start: Optional[Path]) -> Dict[str, object]:
    pyproject = _find_pyproject(start)
    if not pyproject:
        return {}

    try:
        with pyproject.open("rb") as handle:
            data = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning("Ignoring unreadable %s: %s", pyproject, exc)
        return {}

    tool_cfg = data.get("tool", {}).get("exifcaption")
    return tool_cfg if isinstance(tool_cfg, dict) else {}


def _load_env_settings() -> Dict[str, object]:
    values: Dict[str, object] = {}
    for env_key, env_value in os.environ.items():
        if not env_key.startswith(_CONFIG_ENV_PREFIX):
            continue
        key = env_key[len(_CONFIG_ENV_PREFIX) :].lower()
        values[key] = env_value
    return values


def load_settings(start: Optional[Path] = None) -> CaptionSettings:
    """Load project defaults, applying environment overrides when present."""

    raw = _load_pyproject_settings(start)
    raw.update(_load_env_settings())

    return CaptionSettings(
        default_source=_as_path(raw.get("default_source")),
        default_destination=_as_path(raw.get("default_destination")),
        default_composite=_coerce_bool(
            raw.get("default_composite"), CaptionSettings.default_composite
        ),
        default_image_format=_as_format(raw.get("default_image_format")),
    )


def build_runtime_config(
    *,
    settings: CaptionSettings,
    source: Optional[Path] = None,
    destination: Optional[Path] = None,
    composite: Optional[bool] = None,
    image_format: Optional[str] = None,
) -> CaptionConfig:
    """Merge CLI overrides with defaults to produce a runtime config."""

    resolved_source = source or settings.default_source
    if resolved_source is None:
        raise ValueError(
            "No source image given; pass one on the command line or set "
            "default_source under [tool.exifcaption]"
        )
    resolved_source = Path(resolved_source).expanduser()

    resolved_destination = destination or settings.default_destination
    if resolved_destination is not None:
        resolved_destination = Path(resolved_destination).expanduser()

    resolved_composite = (
        settings.default_composite if composite is None else bool(composite)
    )

    resolved_format = _as_format(image_format) or settings.default_image_format
    if resolved_format is None:
        resolved_format = (
            format_for_path(resolved_destination)
            if resolved_destination is not None
            else _FALLBACK_FORMAT
        )
    Image.init()
    writes_output = resolved_destination is not None or image_format is not None
    if writes_output and resolved_format not in Image.SAVE:
        raise ValueError(
            f"Pillow cannot write format '{resolved_format}'; choose one of "
            f"{', '.join(sorted(Image.SAVE))}"
        )

    return CaptionConfig(
        source=resolved_source,
        destination=resolved_destination,
        composite=resolved_composite,
        image_format=resolved_format,
    )


def load_config(
    *,
    start: Optional[Path] = None,
    source: Optional[Path] = None,
    **overrides: object,
) -> CaptionConfig:
    """Convenience helper used by the CLI to resolve the runtime config."""

    settings = load_settings(start)
    return build_runtime_config(settings=settings, source=source, **overrides)
