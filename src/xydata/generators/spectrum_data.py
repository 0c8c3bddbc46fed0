"""
Spectrum data generator.

Every point is one spectrum row of `sample_size` values built from two
parabolic peaks whose positions drift with `variation` / `frequency_stability`
and whose values jitter with `variation`. Values are scaled by 0.02, so they
fall in [0, 2].
"""
from __future__ import annotations

import random
from typing import List, Sequence

from pydantic import field_validator

from ..generator import Cursor, DataGenerator, GeneratorOptions, GeneratorStrategy
from ..types import SpectrumRow
from .registry import register_generator

INITIAL_VALUE = 10.0
MIN_VALUE = 0.0
MAX_VALUE = 100.0
OUTPUT_SCALE = 0.02


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


class SpectrumDataOptions(GeneratorOptions):
    number_of_samples: int = 1000
    # Values in one spectrum sample.
    sample_size: int = 10
    # Variation between adjacent points, 0...100.
    variation: float = 10.0
    # Low stability lets the peaks drift further.
    frequency_stability: float = 1.0
    narrow_factor1: float = 8.0
    narrow_factor2: float = 24.0

    @field_validator("number_of_samples", "sample_size")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        return max(value, 0)

    @field_validator("variation")
    @classmethod
    def _clamp_variation(cls, value: float) -> float:
        return _clamp(value, 0.0, 100.0)

    @field_validator("frequency_stability")
    @classmethod
    def _non_zero_stability(cls, value: float) -> float:
        return value if value else 1.0


@register_generator("spectrum_data")
class SpectrumDataStrategy(GeneratorStrategy[SpectrumRow, SpectrumDataOptions]):
    options_model = SpectrumDataOptions

    def point_count(self, options: SpectrumDataOptions) -> int:
        return options.number_of_samples

    def point_weight(self, options: SpectrumDataOptions) -> int:
        return options.sample_size

    def produce_point(self, options: SpectrumDataOptions, cursor: Cursor) -> SpectrumRow:
        rng = cursor.rng
        row_length = options.sample_size
        if row_length == 0:
            return []
        drift = options.variation / options.frequency_stability / 100.0

        peak1_x = row_length / 8.0 + (rng.random() - 0.5) * drift * row_length / 2.0
        peak2_x = row_length / 2.0 + (rng.random() - 0.5) * drift * row_length
        peak1_x = _clamp(peak1_x, 0.0, row_length)
        peak2_x = _clamp(peak2_x, 0.0, row_length)

        half = row_length / 2.0
        peak1_y = MAX_VALUE / 3.0 * 2.0
        peak2_y = MAX_VALUE / 2.0
        a1 = peak1_y / (half * half) * options.narrow_factor1
        a2 = peak2_y / (half * half) * options.narrow_factor2

        row: List[float] = []
        for i in range(row_length):
            dx1 = 0.8 * i - peak1_x
            dx2 = 0.8 * i - peak2_x
            value1 = _clamp(peak1_y - dx1 * dx1 * a1, MIN_VALUE, MAX_VALUE)
            value2 = _clamp(peak2_y - dx2 * dx2 * a2, MIN_VALUE, MAX_VALUE)

            total = value1 + value2
            total += total * (rng.random() - 0.5) * options.variation / 10.0

            value = _clamp((INITIAL_VALUE + total) / 2.0, MIN_VALUE, MAX_VALUE)
            row.append(value * OUTPUT_SCALE)
        return row

    def continuation_seed(
        self, options: SpectrumDataOptions, last_point: SpectrumRow, window: Sequence[SpectrumRow]
    ) -> SpectrumRow:
        return list(last_point)


def create_spectrum_data_generator(
    *, rng: random.Random | None = None
) -> DataGenerator[SpectrumRow, SpectrumDataOptions]:
    return DataGenerator(SpectrumDataStrategy(), rng=rng)
