from typing import Sequence, TypeVar

T = TypeVar('T')


def gen_data(subtask: str | None, data: Sequence[tuple[str, int, T]]) -> list[T]:
    """Expand a table of test case groups into a list of parameters.

    Each row (name, count, value) contributes count copies of value.  The
    groups are cumulative: expansion stops after the group named subtask,
    so asking for the first group gives only its cases and asking for the
    last (or None) gives all of them.
    """
    tc: list[T] = []
    for name, n, value in data:
        tc.extend([value] * n)
        if subtask == name:
            break
    return tc
