"""
Delta function generator.

Mostly zeros with occasional spikes. A spike is possible once `min_gap`
points have passed since the previous one and forced once `max_gap` points
have passed (`max_gap <= 0` disables forcing).
"""
from __future__ import annotations

import random

from pydantic import field_validator

from ..generator import Cursor, DataGenerator, GeneratorOptions, GeneratorStrategy
from ..types import Point
from .registry import register_generator


class DeltaFunctionOptions(GeneratorOptions):
    number_of_points: int = 1000
    min_gap: int = 1
    max_gap: int = -1
    min_amplitude: float = 0.1
    max_amplitude: float = 1.0
    # Chance of a spike on any point where one is allowed.
    probability: float = 0.02

    @field_validator("number_of_points", "min_gap")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        return max(value, 0)

    @field_validator("probability")
    @classmethod
    def _clamp_probability(cls, value: float) -> float:
        return min(max(value, 0.0), 1.0)


@register_generator("delta_function")
class DeltaFunctionStrategy(GeneratorStrategy[Point, DeltaFunctionOptions]):
    options_model = DeltaFunctionOptions

    def point_count(self, options: DeltaFunctionOptions) -> int:
        return options.number_of_points

    def produce_point(self, options: DeltaFunctionOptions, cursor: Cursor) -> Point:
        rng = cursor.rng
        since_spike = cursor.state.get("since_spike")
        if since_spike is None:
            # A spike on the seed counts against the gap of the new window.
            seeded_spike = cursor.seed is not None and cursor.seed.y != 0
            since_spike = 1 if seeded_spike else options.min_gap

        spike = False
        if since_spike >= options.min_gap:
            if options.max_gap > 0 and since_spike >= options.max_gap:
                spike = True
            elif rng.random() < options.probability:
                spike = True

        y = 0.0
        if spike:
            y = options.min_amplitude + rng.random() * (options.max_amplitude - options.min_amplitude)
            since_spike = 0
        cursor.state["since_spike"] = since_spike + 1

        if cursor.seed is not None:
            x = cursor.seed.x + cursor.index + 1
        else:
            x = float(cursor.index)
        return Point(x, y)


def create_delta_function_generator(
    *, rng: random.Random | None = None
) -> DataGenerator[Point, DeltaFunctionOptions]:
    return DataGenerator(DeltaFunctionStrategy(), rng=rng)
