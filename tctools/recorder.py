"""Recording of graded submissions for the leaderboard.

A submission is stored as one row of the pre-existing submissions table in
the exam database.  Recording only happens when the run asks for it and
both a user token and a database are configured; without them the run is
simply not recorded.
"""

import datetime
import logging
from dataclasses import dataclass
from pathlib import Path

from sqlalchemy import URL, create_engine, text

from . import scores
from .config import RunContext

log = logging.getLogger(__name__)

SOURCE_FILE = 'source'

INSERT_SUBMISSION = text(
    'INSERT INTO submissions (user_id, problem, address, subtime, score, multiplier, source) '
    'VALUES (:user_id, :problem, :address, :subtime, :score, :multiplier, :source)'
)


@dataclass(frozen=True)
class SubmissionRecord:
    user_token: str
    problem_codename: str
    address: str
    submit_timestamp: str
    score: int
    multiplier: int
    source: bytes

    def as_row(self) -> dict:
        return {
            'user_id': self.user_token,
            'problem': self.problem_codename,
            'address': self.address,
            'subtime': self.submit_timestamp,
            'score': self.score,
            'multiplier': self.multiplier,
            'source': self.source,
        }


def format_timestamp(when: datetime.datetime) -> str:
    return when.strftime('%Y-%m-%d %H:%M:%S.%f')


def database_url(location: str) -> str | URL:
    """SQLAlchemy URL for a datastore location, which is either a URL or a
    path to an SQLite database.  Paths are taken literally, so characters
    such as ? or # in a file name are not read as URL syntax."""
    if '://' in location:
        return location
    return URL.create('sqlite', database=location)


class SubmissionRecorder:
    def __init__(self, context: RunContext, enabled: bool) -> None:
        self._context = context
        self._enabled = enabled

    def maybe_record(self, accepted: int) -> SubmissionRecord | None:
        """Store the submission if recording is enabled and configured.

        Returns the stored record, or None if nothing was stored.
        :raises ConfigurationError: if codename, address or input directory
            are missing once token and database are known
        """
        if not self._enabled:
            return None
        token = self._context.get('token')
        location = self._context.get('database')
        if token is None or location is None:
            log.info('Submission not recorded: no user token or exam database configured')
            return None

        record = self.build_record(token, accepted)
        self.insert(location, record)
        log.info('Recorded submission of %s for %s with score %d (x%d)',
                 record.user_token, record.problem_codename, record.score, record.multiplier)
        return record

    def build_record(self, token: str, accepted: int) -> SubmissionRecord:
        problem = self._context.fetch('codename')
        address = self._context.fetch('address')
        source = (Path(self._context.fetch('input_dir')) / SOURCE_FILE).read_bytes()
        return SubmissionRecord(
            user_token=token,
            problem_codename=problem,
            address=address,
            submit_timestamp=format_timestamp(datetime.datetime.now()),
            score=accepted,
            multiplier=scores.multiplier_for(problem, self._context.fetch('meta_dir')),
            source=source,
        )

    @staticmethod
    def insert(location: str, record: SubmissionRecord) -> None:
        engine = create_engine(database_url(location))
        try:
            with engine.begin() as conn:
                conn.execute(INSERT_SUBMISSION, record.as_row())
        finally:
            engine.dispose()
