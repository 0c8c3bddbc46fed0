"""
Sampled data generator.

Pairs every value of `input_data` with a timestamp, as if the values were
sampled at `sampling_frequency` Hz with an extra constant `step` between
samples.
"""
from __future__ import annotations

import random
from typing import Any, Tuple

from pydantic import field_validator

from ..generator import Cursor, DataGenerator, GeneratorOptions, GeneratorStrategy
from ..types import SampledPoint
from .registry import register_generator


class SampledDataOptions(GeneratorOptions):
    input_data: Tuple[Any, ...] = ()
    # Hz; zero falls back to 10 Hz.
    sampling_frequency: float = 50.0
    step: float = 0.0

    @field_validator("sampling_frequency")
    @classmethod
    def _non_zero_frequency(cls, value: float) -> float:
        return value if value else 10.0

    @property
    def interval(self) -> float:
        return 1 / self.sampling_frequency


@register_generator("sampled_data")
class SampledDataStrategy(GeneratorStrategy[SampledPoint, SampledDataOptions]):
    options_model = SampledDataOptions

    def point_count(self, options: SampledDataOptions) -> int:
        return len(options.input_data)

    def produce_point(self, options: SampledDataOptions, cursor: Cursor) -> SampledPoint:
        i = cursor.index
        if cursor.seed is not None:
            n = i + 1
            timestamp = cursor.seed.timestamp + n * options.interval + n * options.step
        else:
            timestamp = i * options.interval + i * options.step
        return SampledPoint(timestamp=timestamp, data=options.input_data[i])


def create_sampled_data_generator(
    *, rng: random.Random | None = None
) -> DataGenerator[SampledPoint, SampledDataOptions]:
    """Sampled data generator with no input data at 50 Hz."""
    return DataGenerator(SampledDataStrategy(), rng=rng)
