"""
Score multipliers for the leaderboard.

The score table is an optional YAML file, scores.yaml, living next to the
problem's metadata directory.  It maps problem codenames to lists of entries:

  sum_of_two:
    - expiration_date: "2026-06-30"
      multiplier: 3
    - expiration_date: "2026-12-31"
      multiplier: 2

The first entry (in file order) that has not yet expired and carries a
multiplier decides the multiplier; otherwise it is 1.  A missing file just
means no multipliers are configured, but a broken one is an error.
"""

import datetime
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .config import ConfigError

log = logging.getLogger(__name__)

SCORE_TABLE_FILE = 'scores.yaml'
DEFAULT_MULTIPLIER = 1


class ScoreTableError(ConfigError):
    pass


@dataclass(frozen=True)
class ScoreMultiplierEntry:
    expiration_date: datetime.date
    multiplier: int

    def is_valid(self, today: datetime.date) -> bool:
        return self.expiration_date >= today


def score_table_path(meta_dir: str | Path) -> Path:
    return Path(meta_dir).parent / SCORE_TABLE_FILE


def load_score_table(path: Path) -> dict | None:
    """Load the score table, or return None if there is none.

    :raises ScoreTableError: if the file exists but cannot be read or parsed
    """
    if not path.exists():
        return None
    try:
        with open(path, 'r') as f:
            table = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as err:
        raise ScoreTableError(f'Score table {path}: failed to load: {err}')
    if table is None:
        return {}
    if not isinstance(table, dict):
        raise ScoreTableError(f'Score table {path}: expected a mapping from problem to scores')
    return table


def _parse_date(value: str | datetime.date, path: Path) -> datetime.date:
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    try:
        return datetime.datetime.strptime(value, '%Y-%m-%d').date()
    except ValueError:
        raise ScoreTableError(f'Score table {path}: invalid expiration date {value!r}')


def _parse_multiplier(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return None
    return value


def valid_entry(scores: list, today: datetime.date, path: Path) -> ScoreMultiplierEntry | None:
    """Return the first entry in scores that has not expired and has a multiplier."""
    for score in scores:
        if not isinstance(score, dict):
            continue
        expiration = score.get('expiration_date')
        if not isinstance(expiration, (str, datetime.date)):
            continue
        expiration_date = _parse_date(expiration, path)
        multiplier = _parse_multiplier(score.get('multiplier'))
        if multiplier is None:
            continue
        entry = ScoreMultiplierEntry(expiration_date, multiplier)
        if entry.is_valid(today):
            return entry
    return None


def multiplier_for(codename: str, meta_dir: str | Path, today: datetime.date | None = None) -> int:
    """Look up the score multiplier for a problem.

    Args:
        codename (str): the problem's codename, key into the score table.
        meta_dir (str or Path): the problem's metadata directory; the score
            table is looked for in its parent.
        today (datetime.date): date against which expiration is checked,
            defaults to the current local date.

    Returns:
        int, the multiplier (1 if nothing applies).
    """
    path = score_table_path(meta_dir)
    table = load_score_table(path)
    if table is None:
        log.debug('No score table at %s', path)
        return DEFAULT_MULTIPLIER

    scores = table.get(codename)
    if not isinstance(scores, list):
        return DEFAULT_MULTIPLIER

    if today is None:
        today = datetime.date.today()
    entry = valid_entry(scores, today, path)
    if entry is None:
        return DEFAULT_MULTIPLIER
    log.debug('Multiplier %d for %s valid until %s', entry.multiplier, codename, entry.expiration_date)
    return entry.multiplier
