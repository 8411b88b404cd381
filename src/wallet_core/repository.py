import asyncio
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import orjson
from pydantic import ValidationError

from src.wallet_core.exceptions import JournalLoadError
from src.wallet_core.models import Character, WalletJournalEntry, WalletJournalUpdated
from src.wallet_core.services.publisher import Publisher, wallet_journal_publisher

logger = logging.getLogger(__name__)


class JournalRepository:
    """Holds the characters and their wallet journals read from a JSON file.

    The file is a list of character objects:
    ``[{"character_id": 1, "name": "...", "wallet_journal": [...]}, ...]``.
    Every change to a journal is announced on the publisher.
    """

    def __init__(self, file_path: Path, publisher: Publisher = wallet_journal_publisher):
        self._file_path = file_path
        self._publisher = publisher
        self._characters: Dict[int, Character] = {}

    def load(self) -> List[Character]:
        """Reads the file without publishing. A missing file means no characters."""
        self._replace(self._read_file())
        return self.characters()

    def _replace(self, characters: List[Character]):
        self._characters = {c.character_id: c for c in characters}
        logger.info(
            "Loaded %d characters from %s", len(self._characters), self._file_path
        )

    def _read_file(self) -> List[Character]:
        if not self._file_path.exists():
            return []
        try:
            with self._file_path.open("rb") as f:
                data = orjson.loads(f.read())
            if not isinstance(data, list):
                raise TypeError("top level must be a list of characters")
            return [Character(**item) for item in data]
        except (orjson.JSONDecodeError, TypeError, ValidationError, OSError) as e:
            raise JournalLoadError(
                f"Cannot read wallet journal file {self._file_path}",
                {"error": str(e)},
            ) from e

    def characters(self) -> List[Character]:
        return sorted(self._characters.values(), key=lambda c: c.name.lower())

    def get(self, character_id: int) -> Optional[Character]:
        return self._characters.get(character_id)

    async def update_journal(
        self, character_id: int, entries: Iterable[WalletJournalEntry]
    ):
        character = self._characters.get(character_id)
        if character is None:
            raise KeyError(character_id)
        character.wallet_journal = list(entries)
        await self._publisher.publish(WalletJournalUpdated(character_id=character_id))

    async def reload(self):
        """Re-reads the file off the event loop and announces every character."""
        self._replace(await asyncio.to_thread(self._read_file))
        for character_id in self._characters:
            await self._publisher.publish(
                WalletJournalUpdated(character_id=character_id)
            )

