from __future__ import annotations

import random
import re
from typing import Any, Dict, Mapping, Type

from ..errors import UnknownGeneratorError
from ..generator import DataGenerator, GeneratorStrategy
from ..scheduling import CooperativeScheduler

_GENERATOR_REGISTRY: Dict[str, Type[GeneratorStrategy]] = {}

_CAMEL_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def normalize_name(name: str) -> str:
    """`ParametricFunctionGenerator`, `parametric-function` -> `parametric_function`."""
    value = name.strip()
    if value.endswith("Generator"):
        value = value[: -len("Generator")]
    value = _CAMEL_RE.sub("_", value)
    return value.replace("-", "_").replace(" ", "_").lower()


def register_generator(name: str):
    """Class decorator for registering GeneratorStrategy implementations."""

    def _decorator(cls: Type[GeneratorStrategy]) -> Type[GeneratorStrategy]:
        key = normalize_name(name)
        if key in _GENERATOR_REGISTRY:
            raise ValueError(f"Generator '{key}' already registered")
        cls.name = key
        _GENERATOR_REGISTRY[key] = cls
        return cls

    return _decorator


def get_strategy_class(name: str) -> Type[GeneratorStrategy]:
    try:
        return _GENERATOR_REGISTRY[normalize_name(name)]
    except KeyError as exc:
        available = ", ".join(sorted(_GENERATOR_REGISTRY)) or "<none>"
        raise UnknownGeneratorError(
            f"Unknown generator '{name}'. Available: {available}"
        ) from exc


def create_generator(
    name: str,
    *,
    options: Mapping[str, Any] | None = None,
    rng: random.Random | None = None,
    scheduler: CooperativeScheduler | None = None,
) -> DataGenerator:
    """Instantiate a default-configured generator by registered name, then apply `options`."""

    strategy_cls = get_strategy_class(name)
    return DataGenerator(strategy_cls(), dict(options or {}), rng=rng, scheduler=scheduler)


def list_generators() -> Dict[str, Type[GeneratorStrategy]]:
    """Expose registered generators for diagnostics/testing."""

    return dict(_GENERATOR_REGISTRY)
