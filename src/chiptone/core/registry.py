"""Central registry for discovering signal sources by name."""

from __future__ import annotations

from typing import Dict, Iterable, Type

from .base import SignalSource


class _Registry:
    """Maps a source's ``name`` to its class.

    A name belongs to one class; registering the same class twice is a
    no-op, registering a different class under a taken name is an error.
    """

    def __init__(self) -> None:
        self._sources: Dict[str, Type[SignalSource]] = {}

    def register_source(self, cls: Type[SignalSource]) -> Type[SignalSource]:
        existing = self._sources.get(cls.name)
        if existing is not None and existing is not cls:
            raise ValueError(
                f"Source name '{cls.name}' already registered by {existing.__qualname__}"
            )
        self._sources[cls.name] = cls
        return cls

    def __contains__(self, name: str) -> bool:
        return name in self._sources

    def sources(self) -> Iterable[str]:
        return sorted(self._sources)

    def get(self, name: str) -> Type[SignalSource]:
        try:
            return self._sources[name]
        except KeyError:
            known = ", ".join(self.sources())
            raise KeyError(f"Unknown source '{name}' (known: {known})") from None

    def create_source(self, name: str, **kwargs) -> SignalSource:
        return self.get(name)(**kwargs)  # type: ignore[arg-type]


registry = _Registry()
