from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Self, Type

from pydantic import BaseModel, ConfigDict, Field


class Outcome(StrEnum):
    ACCEPTED = 'AC'
    WRONG_ANSWER = 'WA'
    TIME_LIMIT_EXCEEDED = 'TLE'
    RUNTIME_ERROR = 'RE'


@dataclass(frozen=True)
class Verdict:
    """Result of checking one test case: pass/fail plus an optional message."""

    ok: bool
    message: str | None = None

    @classmethod
    def from_bool(cls: Type[Self], ok: bool) -> Self:
        return cls(ok=ok)

    @classmethod
    def from_pair(cls: Type[Self], pair: tuple[bool, str | None]) -> Self:
        ok, message = pair
        return cls(ok=ok, message=message)

    @classmethod
    def coerce(cls: Type[Self], value: Any) -> Self:
        """Convert what a checker returned into a Verdict.

        Accepts a Verdict, a bool, or a (bool, message) pair where message
        may be None.
        :raises TypeError: for any other shape
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            return cls.from_bool(value)
        if isinstance(value, tuple) and len(value) == 2 and isinstance(value[0], bool):
            if value[1] is None or isinstance(value[1], str):
                return cls.from_pair(value)
        raise TypeError(f'Cannot convert checker result {value!r} to a verdict')


class RunOptions(BaseModel):
    """Options for one run: per-case time limit in seconds, and whether the
    measured wall time is shown in the result file."""

    time_limit: float = Field(default=1.0, gt=0)
    report_wall_time: bool = True

    model_config = ConfigDict(frozen=True, extra='forbid')

    @classmethod
    def coerce(cls: Type[Self], value: 'RunOptions | float | None') -> Self:
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return cls(time_limit=value)
        raise TypeError(f'Cannot convert {value!r} to run options')
