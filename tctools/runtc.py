#! /usr/bin/env python3
# -*- coding: utf-8 -*-
"""Command line driver: run the test cases of a problem module.

The problem module defines init(subtask), gen(param) and check(testcase),
and optionally OPTIONS (a RunOptions or a time limit in seconds).
"""
from __future__ import annotations

import argparse
import importlib
import importlib.util
import logging
import sys
from pathlib import Path
from types import ModuleType

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from . import logger
from .config import ConfigError, RunContext
from .pipeline import HarnessError, TestCasePipeline
from .verdict import RunOptions
from .version import add_version_arg

log = logging.getLogger(__name__)

PROBLEM_FUNCTIONS = ('init', 'gen', 'check')


class ProblemModuleError(Exception):
    pass


def load_problem_module(name: str) -> ModuleType:
    """Import a problem module given as a .py path or a dotted module name."""
    path = Path(name)
    if path.suffix == '.py':
        if not path.is_file():
            raise ProblemModuleError(f'Problem module {name} not found')
        spec = importlib.util.spec_from_file_location(path.stem, str(path))
        if spec is None or spec.loader is None:
            raise ProblemModuleError(f'Cannot load problem module {name}')
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
    else:
        module = importlib.import_module(name)

    missing = [f for f in PROBLEM_FUNCTIONS if not callable(getattr(module, f, None))]
    if missing:
        raise ProblemModuleError(f'Problem module {name} does not define {", ".join(missing)}')
    return module


def positive_float(s: str) -> float:
    try:
        value = float(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f'{s} is not a number')
    if value <= 0:
        raise argparse.ArgumentTypeError(f'time limit must be positive, got {s}')
    return value


def run_options(args: argparse.Namespace, module: ModuleType) -> RunOptions:
    options = RunOptions.coerce(getattr(module, 'OPTIONS', None))
    if args.time_limit is not None:
        options = options.model_copy(update={'time_limit': args.time_limit})
    if args.no_wall_time:
        options = options.model_copy(update={'report_wall_time': False})
    return options


def argparser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Run the test cases of a problem and write result.txt.')
    parser.add_argument('-t', '--time_limit', type=positive_float, help='time limit per test case in seconds (overrides the module\'s OPTIONS)')
    parser.add_argument('--no-wall-time', dest='no_wall_time', action='store_true', help='do not show measured times in result.txt')
    parser.add_argument('-r', '--record', action='store_true', help='record the score in the exam database, if one is configured')
    parser.add_argument('-l', '--log_level', default='warning', help='set log level (debug, info, warning, error, critical)')
    parser.add_argument(
        '--max_additional_info',
        type=int,
        default=15,
        help='maximum number of lines of additional info (e.g. checker tracebacks) to display about an error (set to 0 to disable additional info)',
    )
    add_version_arg(parser)
    parser.add_argument('module', help='problem module, as a path to a .py file or a dotted module name')
    return parser


def main(argv: list[str] | None = None) -> None:
    args = argparser().parse_args(argv)
    count = logger.initialize_logging(args.log_level, args.max_additional_info)

    try:
        module = load_problem_module(args.module)
        pipeline = TestCasePipeline(RunContext.from_environment(), run_options(args, module))
        summary = pipeline.run(module.init, module.gen, module.check, args.record)
    except KeyboardInterrupt:
        print('\naborting...', file=sys.stderr)
        sys.exit(130)
    except (ProblemModuleError, ImportError, ConfigError, HarnessError, ValidationError, SQLAlchemyError, OSError) as e:
        log.critical(f'{type(e).__name__}: {e}')
        sys.exit(1)

    log.info(f'Score {summary.accepted}/{summary.total} ({count})')


if __name__ == '__main__':
    main()
