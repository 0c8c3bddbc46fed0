"""
Water drop (heat map) generator.

Produces a `rows` x `columns` grid of intensities. Each "water drop" is an
oscillator placed at a normalized (row, column) position whose rings decay
with distance; the grid value is the sum of all oscillators plus
`offset_level`. One point of this generator is one grid row, so a window is
the whole grid.
"""
from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Tuple, Union

from pydantic import field_validator

from ..generator import Cursor, DataGenerator, GeneratorOptions, GeneratorStrategy
from .registry import register_generator


@dataclass(frozen=True)
class WaterDrop:
    """One drop; positions are normalized to [0, 1]."""

    row_normalized: float
    column_normalized: float
    amplitude: float


@dataclass(frozen=True)
class Oscillator:
    center_x: float
    center_z: float
    amplitude: float


def _clamp_unit(value: float) -> float:
    return min(max(float(value), 0.0), 1.0)


class WaterDropDataOptions(GeneratorOptions):
    rows: int = 10
    columns: int = 10
    row_positions_normalized: Tuple[float, ...] = (0.2, 0.5, 0.7)
    column_positions_normalized: Tuple[float, ...] = (0.6, 0.5, 0.3)
    amplitudes: Tuple[float, ...] = (15.0, 50.0, 3.0)
    # Mid level added to every cell.
    offset_level: float = 47.0
    # Larger values give more rings per drop.
    volatility: float = 25.0

    @field_validator("rows", "columns")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        return max(value, 0)

    @field_validator("row_positions_normalized", "column_positions_normalized")
    @classmethod
    def _clamp_positions(cls, value: Tuple[float, ...]) -> Tuple[float, ...]:
        return tuple(_clamp_unit(position) for position in value)


def _water_drops_patch(
    options: WaterDropDataOptions,
    water_drops: Iterable[Union[WaterDrop, Mapping[str, Any]]],
) -> Dict[str, Any]:
    drops = [drop if isinstance(drop, WaterDrop) else WaterDrop(**drop) for drop in water_drops]
    return {
        "row_positions_normalized": tuple(drop.row_normalized for drop in drops),
        "column_positions_normalized": tuple(drop.column_normalized for drop in drops),
        "amplitudes": tuple(drop.amplitude for drop in drops),
    }


def build_oscillators(options: WaterDropDataOptions) -> List[Oscillator]:
    # Drops missing a position or an amplitude are ignored.
    return [
        Oscillator(center_x=row, center_z=column, amplitude=amplitude)
        for row, column, amplitude in zip(
            options.row_positions_normalized,
            options.column_positions_normalized,
            options.amplitudes,
        )
    ]


def waves_at(oscillators: Sequence[Oscillator], x: float, z: float, volatility: float) -> float:
    value = 0.0
    for oscillator in oscillators:
        dist_x = x - oscillator.center_x
        dist_z = z - oscillator.center_z
        dist = math.sqrt(dist_x * dist_x + dist_z * dist_z)
        value += oscillator.amplitude * math.cos(dist * volatility) * math.exp(-dist * 3.0)
    return value


@register_generator("water_drop")
class WaterDropStrategy(GeneratorStrategy[List[float], WaterDropDataOptions]):
    options_model = WaterDropDataOptions
    builders = {"set_water_drops": _water_drops_patch}

    def point_count(self, options: WaterDropDataOptions) -> int:
        return options.rows if options.columns else 0

    def point_weight(self, options: WaterDropDataOptions) -> int:
        return options.columns

    def produce_point(self, options: WaterDropDataOptions, cursor: Cursor) -> List[float]:
        # Oscillators are per-pass state, derived once at the start of the grid.
        oscillators = cursor.state.get("oscillators")
        if oscillators is None:
            oscillators = cursor.state["oscillators"] = build_oscillators(options)

        x = cursor.index / options.rows
        step_z = 1 / options.columns
        return [
            waves_at(oscillators, x, column * step_z, options.volatility) + options.offset_level
            for column in range(options.columns)
        ]

    def continuation_seed(
        self, options: WaterDropDataOptions, last_point: List[float], window: Sequence[List[float]]
    ) -> List[float]:
        return list(last_point)


def create_water_drop_data_generator(
    *, rng: random.Random | None = None
) -> DataGenerator[List[float], WaterDropDataOptions]:
    """Default 10 x 10 heat map with three drops."""
    return DataGenerator(WaterDropStrategy(), rng=rng)
