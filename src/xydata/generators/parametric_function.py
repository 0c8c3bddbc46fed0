"""
Parametric function generator.

Samples an X and a Y function for every `t` step in the start - end range.
"""
from __future__ import annotations

import math
import random
from typing import Callable

from pydantic import field_validator

from ..generator import Cursor, DataGenerator, GeneratorOptions, GeneratorStrategy
from ..types import Point
from .registry import register_generator

ParametricFunction = Callable[[float], float]


def _default_x(t: float) -> float:
    return 3 * math.cos(3 * t)


def _default_y(t: float) -> float:
    return 3 * math.sin(4 * t)


class ParametricFunctionOptions(GeneratorOptions):
    x_function: ParametricFunction = _default_x
    y_function: ParametricFunction = _default_y
    # t range and the t step between samples.
    start: float = 0.0
    end: float = 1000.0
    step: float = 0.5

    @field_validator("step")
    @classmethod
    def _non_zero_step(cls, value: float) -> float:
        return value if value else 0.5


@register_generator("parametric_function")
class ParametricFunctionStrategy(GeneratorStrategy[Point, ParametricFunctionOptions]):
    """
    Point `i` samples both functions at `t = start + i * step`.

    A seeded pass shifts x so that the sample at `start - step` lands on the
    seed; for a linear `x_function` the next window continues with
    `last_x + step`. y is never shifted.
    """

    options_model = ParametricFunctionOptions

    def point_count(self, options: ParametricFunctionOptions) -> int:
        return math.ceil(abs(options.end - options.start) / abs(options.step))

    def produce_point(self, options: ParametricFunctionOptions, cursor: Cursor) -> Point:
        t = options.start + cursor.index * options.step
        x = options.x_function(t)
        if cursor.seed is not None:
            shift = cursor.state.get("x_shift")
            if shift is None:
                shift = cursor.seed.x - options.x_function(options.start - options.step)
                cursor.state["x_shift"] = shift
            x += shift
        return Point(x, options.y_function(t))


def create_parametric_function_generator(
    *, rng: random.Random | None = None
) -> DataGenerator[Point, ParametricFunctionOptions]:
    """Default parametric function generator: 3cos(3t), 3sin(4t), t in [0, 1000) by 0.5."""
    return DataGenerator(ParametricFunctionStrategy(), rng=rng)
