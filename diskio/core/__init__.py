"""Core check functionality."""

from diskio.core.config import CheckConfig, ConfigError, load_config
from diskio.core.context import Context
from diskio.core.counters import CounterError, device_exists, read_counters, to_sample
from diskio.core.fixedpoint import DivisionByZero, divide, format_decimal, integer_part
from diskio.core.logging import CheckLogger, LogError
from diskio.core.models import FIRST_RUN, Metrics, Sample, Status, Thresholds
from diskio.core.output import Output
from diskio.core.rates import IntervalTooShort, compute
from diskio.core.store import SampleStore, StoreError
from diskio.core.thresholds import ThresholdError, evaluate, parse_thresholds, validate

__all__ = [
    "FIRST_RUN",
    "CheckConfig",
    "CheckLogger",
    "ConfigError",
    "Context",
    "CounterError",
    "DivisionByZero",
    "IntervalTooShort",
    "LogError",
    "Metrics",
    "Output",
    "Sample",
    "SampleStore",
    "Status",
    "StoreError",
    "ThresholdError",
    "Thresholds",
    "compute",
    "device_exists",
    "divide",
    "evaluate",
    "format_decimal",
    "integer_part",
    "load_config",
    "parse_thresholds",
    "read_counters",
    "to_sample",
    "validate",
]
