"""Test case harness for graded problem submissions."""

from .config import ConfigError, ConfigurationError, RunContext
from .pipeline import CheckerError, CheckerResultError, GeneratorError, HarnessError, RunSummary, SizingError, TestCasePipeline, run_tc
from .testdata import gen_data
from .verdict import Outcome, RunOptions, Verdict

__all__ = [
    'CheckerError',
    'CheckerResultError',
    'ConfigError',
    'ConfigurationError',
    'GeneratorError',
    'HarnessError',
    'Outcome',
    'RunContext',
    'RunOptions',
    'RunSummary',
    'SizingError',
    'TestCasePipeline',
    'Verdict',
    'gen_data',
    'run_tc',
]
