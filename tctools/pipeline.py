"""
The test case pipeline.

A run is driven by three functions supplied by the problem:

  init(subtask)   -> sized sequence of test case parameters
  gen(parameter)  -> test case
  check(testcase) -> Verdict, bool, or (bool, message)

The number of test cases is printed to stdout (the progress channel) before
the first case runs.  Each check is timed, classified as AC, WA or TLE, and
written to result.txt in the output directory.  A check that raises is
scored RE and the run goes on.  Any other failure, including a failing
generator, aborts the run.
"""

import logging
import sys
import time
import traceback
from collections.abc import Sized
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, TextIO, TypeVar

from .config import RunContext
from .recorder import SubmissionRecorder
from .report import RESULT_FILE, ResultReporter
from .verdict import Outcome, RunOptions, Verdict

log = logging.getLogger(__name__)

T = TypeVar('T')
U = TypeVar('U')

Initializer = Callable[[str | None], Iterable[T]]
Generator = Callable[[T], U]
Checker = Callable[[U], Any]


class HarnessError(Exception):
    pass


class SizingError(HarnessError):
    pass


class GeneratorError(HarnessError):
    def __init__(self, index: int, cause: BaseException) -> None:
        super().__init__(f'Generator failed for case #{index:03}: {cause}')
        self.index = index


class CheckerError(HarnessError):
    """May be raised by checkers; any exception from a checker is handled
    the same way."""


class CheckerResultError(HarnessError):
    def __init__(self, index: int, cause: TypeError) -> None:
        super().__init__(f'Checker result for case #{index:03} is not a verdict: {cause}')
        self.index = index


@dataclass(frozen=True)
class RunSummary:
    accepted: int
    total: int


def classify(verdict: Verdict, elapsed: float, time_limit: float) -> Outcome:
    if elapsed > time_limit:
        return Outcome.TIME_LIMIT_EXCEEDED
    if verdict.ok:
        return Outcome.ACCEPTED
    return Outcome.WRONG_ANSWER


def case_count(params: Iterable) -> int:
    if not isinstance(params, Sized):
        raise SizingError('Cannot get the number of test cases')
    return len(params)


class TestCasePipeline(Generic[T, U]):
    __test__ = False

    def __init__(
        self,
        context: RunContext,
        options: RunOptions | float | None = None,
        progress: TextIO | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.context = context
        self.options = RunOptions.coerce(options)
        self._progress = progress
        self._clock = clock

    @property
    def progress(self) -> TextIO:
        return self._progress if self._progress is not None else sys.stdout

    def run(
        self,
        init: Initializer[T],
        gen: Generator[T, U],
        check: Checker[U],
        record_submission: bool = False,
    ) -> RunSummary:
        subtask = self.context.subtask
        result_path = self.context.output_dir / RESULT_FILE
        with open(result_path, 'w') as fout:
            params = init(subtask)
            total = case_count(params)
            log.debug('Running %d test cases (subtask %s)', total, subtask)
            print(total, file=self.progress, flush=True)

            summary = self._run_cases(params, gen, check, ResultReporter(fout, self.options.report_wall_time))
            if summary.total != total:
                log.warning('Initializer declared %d test cases but produced %d', total, summary.total)

        SubmissionRecorder(self.context, record_submission).maybe_record(summary.accepted)
        return summary

    def _run_cases(self, params: Iterable[T], gen: Generator[T, U], check: Checker[U], reporter: ResultReporter) -> RunSummary:
        accepted = 0
        index = 0
        for param in params:
            index += 1
            try:
                testcase = gen(param)
            except Exception as exc:
                raise GeneratorError(index, exc) from exc
            self.progress.flush()

            start = self._clock()
            try:
                result = check(testcase)
            except Exception as exc:
                reporter.runtime_error(index)
                log.error(f'Check error: {exc}', extra={'additional_info': traceback.format_exc()})
                continue
            try:
                verdict = Verdict.coerce(result)
            except TypeError as exc:
                raise CheckerResultError(index, exc) from exc
            elapsed = self._clock() - start

            outcome = classify(verdict, elapsed, self.options.time_limit)
            if outcome is Outcome.ACCEPTED:
                accepted += 1
            reporter.case(index, outcome, elapsed, verdict.message)

        reporter.score(accepted, index)
        return RunSummary(accepted, index)


def run_tc(
    options: RunOptions | float | None,
    init: Initializer[T],
    gen: Generator[T, U],
    check: Checker[U],
    record_submission: bool = False,
    context: RunContext | None = None,
) -> RunSummary:
    """Run all test cases of a problem and write result.txt.

    Args:
        options: RunOptions, a time limit in seconds, or None for defaults.
        init, gen, check: the problem's initializer, generator and checker.
        record_submission (bool): store the score in the exam database if
            it is configured.
        context (RunContext): where to read configuration, defaults to the
            process environment.

    Returns:
        RunSummary with the number of accepted and run test cases.
    """
    if context is None:
        context = RunContext.from_environment()
    return TestCasePipeline(context, options).run(init, gen, check, record_submission)
