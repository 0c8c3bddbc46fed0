from .registry import create_generator, get_strategy_class, list_generators, register_generator
from .delta_function import DeltaFunctionOptions, create_delta_function_generator
from .ohlc import OHLCOptions, create_ohlc_generator
from .parametric_function import ParametricFunctionOptions, create_parametric_function_generator
from .progressive_function import ProgressiveFunctionOptions, create_progressive_function_generator
from .progressive_random import ProgressiveRandomOptions, create_progressive_random_generator
from .progressive_trace import ProgressiveTraceOptions, create_progressive_trace_generator
from .sampled_data import SampledDataOptions, create_sampled_data_generator
from .spectrum_data import SpectrumDataOptions, create_spectrum_data_generator
from .trace import TraceOptions, create_trace_generator
from .water_drop import WaterDrop, WaterDropDataOptions, create_water_drop_data_generator
from .white_noise import WhiteNoiseOptions, create_white_noise_generator

__all__ = [
    "create_generator",
    "get_strategy_class",
    "list_generators",
    "register_generator",
    "DeltaFunctionOptions",
    "OHLCOptions",
    "ParametricFunctionOptions",
    "ProgressiveFunctionOptions",
    "ProgressiveRandomOptions",
    "ProgressiveTraceOptions",
    "SampledDataOptions",
    "SpectrumDataOptions",
    "TraceOptions",
    "WaterDrop",
    "WaterDropDataOptions",
    "WhiteNoiseOptions",
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
