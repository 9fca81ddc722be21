import io

from tctools.report import ResultReporter, format_case_line, format_score_line
from tctools.verdict import Outcome


def test_case_line_with_time():
    assert format_case_line(1, Outcome.ACCEPTED, 0.0234) == 'Case #001: AC | Time: 0.023s'


def test_case_line_without_time():
    assert format_case_line(12, Outcome.WRONG_ANSWER, 0.5, report_wall_time=False) == 'Case #012: WA'


def test_case_line_wide_index():
    assert format_case_line(1234, Outcome.TIME_LIMIT_EXCEEDED, 1.2034) == 'Case #1234: TLE | Time: 1.203s'


def test_runtime_error_has_no_time():
    out = io.StringIO()
    ResultReporter(out, report_wall_time=True).runtime_error(3)
    assert out.getvalue() == 'Case #003: RE\n'


def test_message_block():
    out = io.StringIO()
    reporter = ResultReporter(out)
    reporter.case(2, Outcome.WRONG_ANSWER, 0.2, 'expected 5 got 4')
    reporter.score(0, 2)
    assert out.getvalue() == 'Case #002: WA | Time: 0.200s\n\nexpected 5 got 4\n\n\nScore: 0/2\n'


def test_score_line():
    assert format_score_line(2, 3) == 'Score: 2/3'
