"""
Progressive random generator.

x advances by one per point; y is random noise of height `data_max` riding on
an offset that takes a random step every `offset_step` points.
"""
from __future__ import annotations

import random

from pydantic import field_validator

from ..generator import Cursor, DataGenerator, GeneratorOptions, GeneratorStrategy
from ..types import Point
from .registry import register_generator


class ProgressiveRandomOptions(GeneratorOptions):
    number_of_points: int = 1000
    # How often (in points) the offset moves.
    offset_step: int = 10
    offset_delta_max: float = 0.3
    offset_delta_min: float = 0.1
    data_max: float = 0.5

    @field_validator("number_of_points")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        return max(value, 0)

    @field_validator("offset_step")
    @classmethod
    def _positive_offset_step(cls, value: int) -> int:
        return value if value > 0 else 10

    @field_validator("data_max")
    @classmethod
    def _clamp_data_max(cls, value: float) -> float:
        return min(max(value, 0.0), 1.0)


@register_generator("progressive_random")
class ProgressiveRandomStrategy(GeneratorStrategy[Point, ProgressiveRandomOptions]):
    options_model = ProgressiveRandomOptions

    def point_count(self, options: ProgressiveRandomOptions) -> int:
        return options.number_of_points

    def produce_point(self, options: ProgressiveRandomOptions, cursor: Cursor) -> Point:
        rng = cursor.rng
        offset = cursor.state.get("offset")
        if offset is None:
            offset = 0.5 if cursor.seed is None else cursor.seed.y - options.data_max / 2

        if cursor.index % options.offset_step == 0:
            delta = rng.random() * (options.offset_delta_max - options.offset_delta_min) + options.offset_delta_min
            offset = offset + delta if rng.random() > 0.5 else offset - delta
        offset = min(max(offset, 0.0), 1.0 - options.data_max)
        cursor.state["offset"] = offset

        if cursor.seed is not None:
            x = cursor.seed.x + cursor.index + 1
        else:
            x = float(cursor.index)
        return Point(x, offset + rng.random() * options.data_max)


def create_progressive_random_generator(
    *, rng: random.Random | None = None
) -> DataGenerator[Point, ProgressiveRandomOptions]:
    return DataGenerator(ProgressiveRandomStrategy(), rng=rng)
