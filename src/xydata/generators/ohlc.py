"""
OHLC (candle) generator.

Each candle opens at the previous close and walks a few random ticks; high
and low are the extremes of that walk. Timestamps advance by `data_frequency`.
"""
from __future__ import annotations

import random

from pydantic import field_validator

from ..generator import Cursor, DataGenerator, GeneratorOptions, GeneratorStrategy
from ..types import OHLCPoint
from .registry import register_generator

TICKS_PER_CANDLE = 4


class OHLCOptions(GeneratorOptions):
    number_of_points: int = 1000
    start_timestamp: float = 0.0
    # Timestamp distance between two candles.
    data_frequency: float = 1.0
    # Opening value of the first candle.
    start: float = 100.0
    volatility: float = 0.1

    @field_validator("number_of_points")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        return max(value, 0)

    @field_validator("data_frequency")
    @classmethod
    def _non_zero_frequency(cls, value: float) -> float:
        return value if value else 1.0

    @field_validator("volatility")
    @classmethod
    def _non_negative_volatility(cls, value: float) -> float:
        return abs(value)


@register_generator("ohlc")
class OHLCStrategy(GeneratorStrategy[OHLCPoint, OHLCOptions]):
    options_model = OHLCOptions

    def point_count(self, options: OHLCOptions) -> int:
        return options.number_of_points

    def produce_point(self, options: OHLCOptions, cursor: Cursor) -> OHLCPoint:
        rng = cursor.rng
        last = cursor.last
        if cursor.seed is not None:
            timestamp = cursor.seed.timestamp + (cursor.index + 1) * options.data_frequency
        else:
            timestamp = options.start_timestamp + cursor.index * options.data_frequency

        open_ = last.close if last is not None else options.start
        ticks = [open_]
        value = open_
        for _ in range(TICKS_PER_CANDLE):
            value = max(value + (rng.random() - 0.5) * 2 * options.volatility, 0.0)
            ticks.append(value)
        return OHLCPoint(
            timestamp=timestamp,
            open=open_,
            high=max(ticks),
            low=min(ticks),
            close=value,
        )


def create_ohlc_generator(*, rng: random.Random | None = None) -> DataGenerator[OHLCPoint, OHLCOptions]:
    return DataGenerator(OHLCStrategy(), rng=rng)
