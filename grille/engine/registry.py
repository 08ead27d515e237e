"""Generator registry — every generator is a standalone function registered via decorator.

Usage:
    @generator(name="phyllotaxis", kind=GeneratorKind.OUTER, description="Golden-angle spiral")
    def phyllotaxis(config: PatternConfig) -> list[Point]:
        ...

Adding a new pattern or fill algorithm = creating one file with the decorator.
Nothing else changes.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Callable

from grille.utils.geometry import Point

logger = logging.getLogger(__name__)


class GeneratorKind(enum.Enum):
    OUTER = "outer"
    CENTER = "center"


class UnknownGeneratorError(ValueError):
    """Raised when dispatch is asked for a name nobody registered."""

    def __init__(self, kind: GeneratorKind, name: str, known: list[str]) -> None:
        self.kind = kind
        self.name = name
        self.known = known
        label = "pattern" if kind is GeneratorKind.OUTER else "center fill algorithm"
        super().__init__(f"Unknown {label}: {name!r} (known: {', '.join(known) or 'none'})")


@dataclass
class GeneratorSpec:
    name: str
    kind: GeneratorKind
    fn: Callable[[Any], list[Point]]
    description: str = ""


class GeneratorRegistry:
    """Registry of outer-pattern and center-fill generators, keyed by (kind, name)."""

    def __init__(self) -> None:
        self._generators: dict[tuple[GeneratorKind, str], GeneratorSpec] = {}

    def register(self, spec: GeneratorSpec) -> None:
        key = (spec.kind, spec.name)
        if key in self._generators:
            raise ValueError(f"Duplicate {spec.kind.value} generator: {spec.name}")
        self._generators[key] = spec
        logger.debug("Registered %s generator %s", spec.kind.value, spec.name)

    def get(self, kind: GeneratorKind, name: str) -> GeneratorSpec:
        spec = self._generators.get((kind, name))
        if spec is None:
            raise UnknownGeneratorError(kind, name, self.names(kind))
        return spec

    def names(self, kind: GeneratorKind) -> list[str]:
        return sorted(name for k, name in self._generators if k is kind)

    def all(self) -> list[GeneratorSpec]:
        return sorted(self._generators.values(), key=lambda s: (s.kind.value, s.name))

    @property
    def count(self) -> int:
        return len(self._generators)


# Module-level singleton
_registry = GeneratorRegistry()


def get_registry() -> GeneratorRegistry:
    return _registry


def generator(*, name: str, kind: GeneratorKind, description: str = ""):
    """Decorator to register a generator function."""

    def decorator(fn: Callable[[Any], list[Point]]):
        _registry.register(GeneratorSpec(name=name, kind=kind, fn=fn, description=description))
        return fn

    return decorator
