#! /usr/bin/env python3
"""
Sum of two integers.

The submission reads lines "a b" from its input and answers each with a + b.
Test cases are written to stdout, answers read from stdin, so the harness
is expected to be connected to the submission through a pair of pipes.

Run directly, or with: runtc examples/sumtwo/sumtwo.py
"""
import random
import sys

from tctools import RunOptions, gen_data, run_tc

OPTIONS = RunOptions(time_limit=1.0)

# (subtask, number of cases, bound on |a| and |b|)
SUBTASKS = [
    ('small', 5, 100),
    ('medium', 5, 10**9),
    ('large', 10, 10**18),
]

rng = random.Random(2026)


def init(subtask):
    return gen_data(subtask, SUBTASKS)


def gen(bound):
    return rng.randint(-bound, bound), rng.randint(-bound, bound)


def check(tc):
    a, b = tc
    print(a, b, flush=True)
    line = sys.stdin.readline()
    if not line:
        raise EOFError('submission closed its output')
    try:
        answer = int(line)
    except ValueError:
        return False, f'expected an integer, got {line.strip()!r}'
    if answer != a + b:
        return False, f'expected {a + b} got {answer}'
    return True


if __name__ == '__main__':
    run_tc(OPTIONS, init, gen, check, record_submission=True)
