from __future__ import annotations

import random

from pydantic import field_validator

from ..generator import Cursor, DataGenerator, GeneratorOptions, GeneratorStrategy
from ..types import Point
from .registry import register_generator


class TraceOptions(GeneratorOptions):
    number_of_points: int = 1000

    @field_validator("number_of_points")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        return max(value, 0)


@register_generator("trace")
class TraceStrategy(GeneratorStrategy[Point, TraceOptions]):
    """Random walk in both x and y; there is no ordering dimension, continuation resumes the walk."""

    options_model = TraceOptions

    def point_count(self, options: TraceOptions) -> int:
        return options.number_of_points

    def produce_point(self, options: TraceOptions, cursor: Cursor) -> Point:
        last = cursor.last or Point(0.0, 0.0)
        rng = cursor.rng
        return Point(
            last.x + (rng.random() - 0.5) * 2,
            last.y + (rng.random() - 0.5) * 2,
        )


def create_trace_generator(*, rng: random.Random | None = None) -> DataGenerator[Point, TraceOptions]:
    return DataGenerator(TraceStrategy(), rng=rng)
