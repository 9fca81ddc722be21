import datetime
import textwrap

import pytest

from tctools import scores

TODAY = datetime.date(2026, 10, 17)


@pytest.fixture
def meta_dir(tmp_path):
    meta = tmp_path / 'problem' / 'meta'
    meta.mkdir(parents=True)
    return meta


def write_scores(meta_dir, text):
    (meta_dir.parent / 'scores.yaml').write_text(textwrap.dedent(text))


def test_no_score_table(meta_dir):
    assert scores.multiplier_for('sum', meta_dir, TODAY) == 1


def test_unknown_problem(meta_dir):
    write_scores(meta_dir, '''
        other:
          - expiration_date: "2030-01-01"
            multiplier: 4
    ''')
    assert scores.multiplier_for('sum', meta_dir, TODAY) == 1


def test_scores_not_a_list(meta_dir):
    write_scores(meta_dir, '''
        sum: 3
    ''')
    assert scores.multiplier_for('sum', meta_dir, TODAY) == 1


def test_valid_entry(meta_dir):
    write_scores(meta_dir, '''
        sum:
          - expiration_date: "2026-12-31"
            multiplier: 3
    ''')
    assert scores.multiplier_for('sum', meta_dir, TODAY) == 3


def test_expiring_today_is_valid(meta_dir):
    write_scores(meta_dir, '''
        sum:
          - expiration_date: "2026-10-17"
            multiplier: 2
    ''')
    assert scores.multiplier_for('sum', meta_dir, TODAY) == 2


def test_all_expired(meta_dir):
    write_scores(meta_dir, '''
        sum:
          - expiration_date: "2026-10-16"
            multiplier: 2
          - expiration_date: "2020-01-01"
            multiplier: 5
    ''')
    assert scores.multiplier_for('sum', meta_dir, TODAY) == 1


def test_first_valid_entry_wins(meta_dir):
    write_scores(meta_dir, '''
        sum:
          - expiration_date: "2025-01-01"
            multiplier: 5
          - expiration_date: "2027-01-01"
            multiplier: 3
          - expiration_date: "2028-01-01"
            multiplier: 2
    ''')
    assert scores.multiplier_for('sum', meta_dir, TODAY) == 3


def test_entry_without_multiplier_is_skipped(meta_dir):
    write_scores(meta_dir, '''
        sum:
          - expiration_date: "2027-01-01"
          - expiration_date: "2027-01-01"
            multiplier: -1
          - expiration_date: "2027-01-01"
            multiplier: true
          - expiration_date: "2028-01-01"
            multiplier: 7
    ''')
    assert scores.multiplier_for('sum', meta_dir, TODAY) == 7


def test_unquoted_dates(meta_dir):
    write_scores(meta_dir, '''
        sum:
          - expiration_date: 2027-01-01
            multiplier: 4
    ''')
    assert scores.multiplier_for('sum', meta_dir, TODAY) == 4


def test_repeated_lookup_is_stable(meta_dir):
    write_scores(meta_dir, '''
        sum:
          - expiration_date: "2027-01-01"
            multiplier: 4
    ''')
    assert scores.multiplier_for('sum', meta_dir, TODAY) == scores.multiplier_for('sum', meta_dir, TODAY) == 4


def test_empty_score_table(meta_dir):
    write_scores(meta_dir, '')
    assert scores.multiplier_for('sum', meta_dir, TODAY) == 1


def test_invalid_date_is_fatal(meta_dir):
    write_scores(meta_dir, '''
        sum:
          - expiration_date: "31/12/2026"
            multiplier: 2
    ''')
    with pytest.raises(scores.ScoreTableError):
        scores.multiplier_for('sum', meta_dir, TODAY)


def test_broken_yaml_is_fatal(meta_dir):
    write_scores(meta_dir, '''
        sum: [unterminated
    ''')
    with pytest.raises(scores.ScoreTableError):
        scores.multiplier_for('sum', meta_dir, TODAY)


def test_top_level_not_mapping_is_fatal(meta_dir):
    write_scores(meta_dir, '''
        - sum
    ''')
    with pytest.raises(scores.ScoreTableError):
        scores.multiplier_for('sum', meta_dir, TODAY)


def test_entry_is_valid():
    entry = scores.ScoreMultiplierEntry(datetime.date(2026, 10, 17), 2)
    assert entry.is_valid(TODAY)
    assert not entry.is_valid(TODAY + datetime.timedelta(days=1))


def test_valid_entry_skips_expired_and_incomplete(tmp_path):
    entries = [
        {'expiration_date': '2026-10-16', 'multiplier': 9},
        {'expiration_date': '2027-01-01'},
        {'expiration_date': '2027-01-01', 'multiplier': 2},
    ]
    entry = scores.valid_entry(entries, TODAY, tmp_path / 'scores.yaml')
    assert entry == scores.ScoreMultiplierEntry(datetime.date(2027, 1, 1), 2)
