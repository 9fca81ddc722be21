"""Writing of the result file, result.txt.

The file holds one line per test case, optionally followed by the checker's
message, and ends with the score line:

  Case #001: AC | Time: 0.023s
  Case #002: WA | Time: 0.501s

  expected 5 got 4

  Case #003: RE

  Score: 1/3
"""

from typing import TextIO

from .verdict import Outcome

RESULT_FILE = 'result.txt'


def format_case_line(index: int, outcome: Outcome, elapsed: float | None = None, report_wall_time: bool = True) -> str:
    line = f'Case #{index:03}: {outcome}'
    if report_wall_time and elapsed is not None:
        line += f' | Time: {elapsed:.3f}s'
    return line


def format_score_line(accepted: int, total: int) -> str:
    return f'Score: {accepted}/{total}'


class ResultReporter:
    def __init__(self, out: TextIO, report_wall_time: bool = True) -> None:
        self._out = out
        self._report_wall_time = report_wall_time

    def case(self, index: int, outcome: Outcome, elapsed: float | None = None, message: str | None = None) -> None:
        self._out.write(format_case_line(index, outcome, elapsed, self._report_wall_time) + '\n')
        if message is not None:
            self._out.write(f'\n{message}\n\n')
        self._out.flush()

    def runtime_error(self, index: int) -> None:
        self.case(index, Outcome.RUNTIME_ERROR)

    def score(self, accepted: int, total: int) -> None:
        self._out.write('\n' + format_score_line(accepted, total) + '\n')
        self._out.flush()
