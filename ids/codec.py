"""
Safe integer IDs - uncoordinated, sortable, 53-bit safe.

Layout: elapsed milliseconds since the start of `epoch_year`, multiplied by
`disambiguation_space`, plus a disambiguation value in [0, disambiguation_space).
IDs stay within 2**53 - 1 until the end of `last_safe_year`.
"""

import random as _random

from core.errors import IdRangeError
from ids.sequence import Sequence
from utils.timestamp import from_millis, now_millis, year_start_millis

MAX_SAFE_INTEGER = 2**53 - 1
# Mean Gregorian year, 365.2425 days
MILLIS_PER_YEAR = 31_556_952_000

DEFAULT_EPOCH_YEAR = 2023
DEFAULT_DISAMBIGUATION_SPACE = 1024


class SafeIntId:
    """ID codec config plus random and counter allocation."""

    __slots__ = ("_epoch_year", "_epoch_millis", "_space", "_safe_span_years",
                 "_last_safe_year", "_random", "_clock", "_sequence")

    def __init__(self, epoch_year=DEFAULT_EPOCH_YEAR, disambiguation_space=DEFAULT_DISAMBIGUATION_SPACE,
                 random=None, clock=None):
        self._epoch_year = epoch_year
        self._epoch_millis = year_start_millis(epoch_year)
        self._space = max(disambiguation_space, 1)
        self._safe_span_years = 2**53 // (self._space * MILLIS_PER_YEAR)
        self._last_safe_year = epoch_year + self._safe_span_years - 1
        self._random = random or _random.Random()
        self._clock = clock or now_millis
        self._sequence = None

    @classmethod
    def from_config(cls, id_config):
        """Build from an IdConfig section."""
        rng = _random.SystemRandom() if id_config.secure_random else None
        return cls(id_config.epoch_year, id_config.disambiguation_space, random=rng)

    @property
    def epoch_year(self):
        return self._epoch_year

    @property
    def epoch_millis(self):
        return self._epoch_millis

    @property
    def disambiguation_space(self):
        return self._space

    @property
    def safe_span_years(self):
        return self._safe_span_years

    @property
    def last_safe_year(self):
        return self._last_safe_year

    @property
    def random(self):
        return self._random

    def elapsed_millis(self):
        """Milliseconds since the epoch year started. Negative before it."""
        return self._clock() - self._epoch_millis

    def encode(self, tick, value):
        return tick * self._space + value

    def timestamp_of(self, id_value):
        """Elapsed-milliseconds component of an ID."""
        return id_value // self._space

    def get_id(self):
        """New ID with a random disambiguation value."""
        return self.encode(self.elapsed_millis(), self._random.randrange(self._space))

    def inc_id(self):
        """New ID from this instance's counter. Strictly increasing per instance."""
        return self.sequence.next()

    async def inc_id_async(self):
        """Like inc_id, but suspends instead of polling when a tick is exhausted."""
        return await self.sequence.next_async()

    @property
    def sequence(self):
        """Counter state owned by this instance, created on first use."""
        if self._sequence is None:
            self._sequence = Sequence(self)
        return self._sequence

    def get_created_at(self, id_value, utc=False):
        """Creation time of an ID, millisecond resolution. Aware UTC or local datetime."""
        epoch_ms = self.timestamp_of(id_value) + self._epoch_millis
        try:
            return from_millis(epoch_ms, utc=utc)
        except (OverflowError, OSError, ValueError) as exc:
            raise IdRangeError("ID timestamp outside datetime range", id_value=id_value, cause=exc) from exc

    def to_dict(self):
        return {
            "epoch_year": self._epoch_year,
            "epoch_millis": self._epoch_millis,
            "disambiguation_space": self._space,
            "safe_span_years": self._safe_span_years,
            "last_safe_year": self._last_safe_year,
        }

    def __repr__(self):
        return (f"SafeIntId(epoch_year={self._epoch_year}, "
                f"disambiguation_space={self._space}, last_safe_year={self._last_safe_year})")
