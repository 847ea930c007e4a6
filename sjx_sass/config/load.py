"""
Загрузчик опций компиляции из YAML-файла.
"""

from __future__ import annotations

from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ..errors import ConfigurationError
from .model import CompileOptions

_yaml = YAML(typ="safe")


def _read_yaml_map(path: Path) -> dict:
    """Читает YAML файл и возвращает словарь."""
    if not path.is_file():
        raise ConfigurationError(f"Options file not found: {path}")
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigurationError(f"YAML must be a mapping: {path}")
    return raw


def load_options(path: Path) -> CompileOptions:
    """
    Загружает CompileOptions из YAML.

    Относительные include_paths и context_file резолвятся от каталога
    самого YAML-файла, а не от текущей директории.
    """
    path = Path(path)
    opts = CompileOptions.from_dict(_read_yaml_map(path))
    base = path.resolve().parent
    opts.include_paths = [str(base / p) for p in opts.include_paths]
    if opts.context_file is not None:
        opts.context_file = str(base / opts.context_file)
    return opts


__all__ = ["load_options"]
