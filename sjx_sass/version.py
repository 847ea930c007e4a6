from __future__ import annotations

from importlib import metadata

# имя дистрибутива на индексе и имя пакета при установке из исходников
_DISTRIBUTIONS = ("styled-jsx-sass", "sjx_sass")


def tool_version() -> str:
    """Версия установленного styled-jsx-sass; "0.0.0" для неустановленного дерева."""
    for name in _DISTRIBUTIONS:
        try:
            return metadata.version(name)
        except metadata.PackageNotFoundError:
            pass
    return "0.0.0"


__all__ = ["tool_version"]
