from __future__ import annotations

import random

from pydantic import field_validator

from ..generator import Cursor, DataGenerator, GeneratorOptions, GeneratorStrategy
from ..types import Point
from .registry import register_generator


class ProgressiveTraceOptions(GeneratorOptions):
    number_of_points: int = 1000

    @field_validator("number_of_points")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        return max(value, 0)


@register_generator("progressive_trace")
class ProgressiveTraceStrategy(GeneratorStrategy[Point, ProgressiveTraceOptions]):
    """Random walk in y over an x that advances by one per point."""

    options_model = ProgressiveTraceOptions

    def point_count(self, options: ProgressiveTraceOptions) -> int:
        return options.number_of_points

    def produce_point(self, options: ProgressiveTraceOptions, cursor: Cursor) -> Point:
        last = cursor.last
        y = last.y if last is not None else 0.0
        if cursor.seed is not None:
            x = cursor.seed.x + cursor.index + 1
        else:
            x = float(cursor.index)
        return Point(x, y + (cursor.rng.random() - 0.5) * 2)


def create_progressive_trace_generator(
    *, rng: random.Random | None = None
) -> DataGenerator[Point, ProgressiveTraceOptions]:
    return DataGenerator(ProgressiveTraceStrategy(), rng=rng)
