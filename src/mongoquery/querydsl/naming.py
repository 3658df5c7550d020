"""Temporary identifiers for aggregate results.

An aggregate expression is replaced by a placeholder naming the field that
its `$group` stage writes to. Names are random lowercase strings; a generator
remembers what it issued during one compile pass and never hands out the same
name twice, nor any name listed in `reserved`.
"""

import random
from typing import Iterable, Optional, Set

from ..constants import NAME_ALPHABET
from ..exceptions import InvalidConfigError
from ..settings import settings as api_settings

__all__ = ("NameGenerator",)


class NameGenerator:
    """Produce fixed-length lowercase identifiers for one compile pass.

    Args:
        length: Number of letters per identifier (default from settings)
        reserved: Names that must never be produced, e.g. real field names
        rng: Random source, injectable for reproducible output
    """

    def __init__(
        self,
        length: Optional[int] = None,
        reserved: Optional[Iterable[str]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.length = api_settings.AGGREGATE_NAME_LENGTH if length is None else length
        if self.length <= 0:
            raise InvalidConfigError(
                "Aggregate name length must be positive",
                config_key="AGGREGATE_NAME_LENGTH",
                value=self.length,
                expected=">0",
            )
        self._rng = rng or random.Random()
        self._reserved: Set[str] = set(reserved or ())
        self.issued: Set[str] = set()

    def _draw(self) -> str:
        return "".join(self._rng.choice(NAME_ALPHABET) for _ in range(self.length))

    def generate(self) -> str:
        """Return a fresh identifier not yet issued by this generator."""
        if len(self.issued) + len(self._reserved) >= len(NAME_ALPHABET) ** self.length:
            raise InvalidConfigError("Aggregate name space exhausted", length=self.length, issued=len(self.issued))
        name = self._draw()
        while name in self.issued or name in self._reserved:
            name = self._draw()
        self.issued.add(name)
        return name

    __call__ = generate
