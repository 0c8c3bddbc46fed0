from __future__ import annotations

import random

from pydantic import field_validator

from ..generator import Cursor, DataGenerator, GeneratorOptions, GeneratorStrategy
from ..types import Point
from .registry import register_generator


class WhiteNoiseOptions(GeneratorOptions):
    number_of_points: int = 1000
    noise_amplitude: float = 1.0

    @field_validator("number_of_points")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        return max(value, 0)


@register_generator("white_noise")
class WhiteNoiseStrategy(GeneratorStrategy[Point, WhiteNoiseOptions]):
    """Uniform noise in [-noise_amplitude, noise_amplitude], x advancing by one."""

    options_model = WhiteNoiseOptions

    def point_count(self, options: WhiteNoiseOptions) -> int:
        return options.number_of_points

    def produce_point(self, options: WhiteNoiseOptions, cursor: Cursor) -> Point:
        if cursor.seed is not None:
            x = cursor.seed.x + cursor.index + 1
        else:
            x = float(cursor.index)
        return Point(x, (cursor.rng.random() * 2 - 1) * options.noise_amplitude)


def create_white_noise_generator(
    *, rng: random.Random | None = None
) -> DataGenerator[Point, WhiteNoiseOptions]:
    return DataGenerator(WhiteNoiseStrategy(), rng=rng)
