"""
xydata package entry. Importing this package registers the built-in
generator families.
"""

from .errors import (
    GenerationCancelled,
    GeneratorBusyError,
    StreamBusyError,
    StreamExhausted,
    UnknownGeneratorError,
    XYDataError,
)
from .generator import Cursor, DataGenerator, GeneratorOptions, GeneratorStrategy
from .generators import (
    WaterDrop,
    create_delta_function_generator,
    create_generator,
    create_ohlc_generator,
    create_parametric_function_generator,
    create_progressive_function_generator,
    create_progressive_random_generator,
    create_progressive_trace_generator,
    create_sampled_data_generator,
    create_spectrum_data_generator,
    create_trace_generator,
    create_water_drop_data_generator,
    create_white_noise_generator,
    list_generators,
    register_generator,
)
from .scheduling import CooperativeScheduler, GenerationToken
from .stream import Stream, StreamState
from .types import OHLCPoint, Point, SampledPoint

__all__ = [
    "Cursor",
    "DataGenerator",
    "GeneratorOptions",
    "GeneratorStrategy",
    "CooperativeScheduler",
    "GenerationToken",
    "Stream",
    "StreamState",
    "Point",
    "OHLCPoint",
    "SampledPoint",
    "WaterDrop",
    "XYDataError",
    "UnknownGeneratorError",
    "GeneratorBusyError",
    "StreamBusyError",
    "StreamExhausted",
    "GenerationCancelled",
    "create_generator",
    "list_generators",
    "register_generator",
    "create_delta_function_generator",
    "create_ohlc_generator",
    "create_parametric_function_generator",
    "create_progressive_function_generator",
    "create_progressive_random_generator",
    "create_progressive_trace_generator",
    "create_sampled_data_generator",
    "create_spectrum_data_generator",
    "create_trace_generator",
    "create_water_drop_data_generator",
    "create_white_noise_generator",
]
