"""Reads the baseline prize list from a JSON file."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from extralife.core.errors import SeedUnavailable
from extralife.schemas.prizes import Prize

logger = logging.getLogger(__name__)

_PRIZE_LIST = TypeAdapter(list[Prize])


class SeedLoader:
    """Loads the seed prizes from a configured path.

    The path is fixed at construction time; see ``Settings.seed_path``.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def load(self) -> list[Prize]:
        """Return the seed prizes in file order.

        Raises:
            SeedUnavailable: the file cannot be read, is not valid JSON, is
                not a JSON array, or an entry is not a valid prize.
        """
        try:
            raw = self.path.read_bytes()
        except OSError as exc:
            raise SeedUnavailable(str(self.path), exc.strerror or str(exc)) from exc

        try:
            prizes = _PRIZE_LIST.validate_json(raw)
        except ValidationError as exc:
            raise SeedUnavailable(str(self.path), _describe(exc)) from exc

        logger.info("Loaded %d seed prizes from %s", len(prizes), self.path)
        return prizes


def _describe(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "<root>"
    return f"{exc.error_count()} validation error(s), first at {location}: {first['msg']}"
