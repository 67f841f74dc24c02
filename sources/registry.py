from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from config.settings import Settings, get_settings


_REGISTRY: Dict[str, Callable[[Settings], Any]] = {}


def register(name: str, factory: Callable[[Settings], Any]) -> None:
    _REGISTRY[name] = factory


def get_source(name: str, settings: Optional[Settings] = None):
    if name not in _REGISTRY:
        raise KeyError(f"Unknown source: {name}")
    return _REGISTRY[name](settings or get_settings())


def available_sources() -> Dict[str, Any]:
    return dict(_REGISTRY)
