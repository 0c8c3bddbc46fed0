from __future__ import annotations

import math
import random
from typing import Callable

from pydantic import field_validator

from ..generator import Cursor, DataGenerator, GeneratorOptions, GeneratorStrategy
from ..types import Point
from .registry import register_generator


class ProgressiveFunctionOptions(GeneratorOptions):
    sampling_function: Callable[[float], float] = math.sin
    start: float = 0.0
    end: float = 100.0
    # x step between samples
    step: float = 1.0

    @field_validator("step")
    @classmethod
    def _non_zero_step(cls, value: float) -> float:
        return value if value else 1.0


@register_generator("progressive_function")
class ProgressiveFunctionStrategy(GeneratorStrategy[Point, ProgressiveFunctionOptions]):
    """Samples `y = f(x)` with x advancing by `step`; seeded passes continue after the seed x."""

    options_model = ProgressiveFunctionOptions

    def point_count(self, options: ProgressiveFunctionOptions) -> int:
        return math.ceil(abs(options.end - options.start) / abs(options.step))

    def produce_point(self, options: ProgressiveFunctionOptions, cursor: Cursor) -> Point:
        if cursor.seed is not None:
            x = cursor.seed.x + (cursor.index + 1) * options.step
        else:
            x = options.start + cursor.index * options.step
        return Point(x, options.sampling_function(x))


def create_progressive_function_generator(
    *, rng: random.Random | None = None
) -> DataGenerator[Point, ProgressiveFunctionOptions]:
    return DataGenerator(ProgressiveFunctionStrategy(), rng=rng)
