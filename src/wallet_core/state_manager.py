import logging
from decimal import Decimal
from pathlib import Path
from typing import Dict, Optional

import orjson
from pydantic import BaseModel, Field

from src.wallet_core.config import APP_DATA_DIR

logger = logging.getLogger(__name__)


class AppState(BaseModel):
    """Strongly-typed application persistent state."""
    last_character_id: Optional[int] = Field(default=None)
    mineral_prices: Dict[str, str] = Field(default_factory=dict)
    prices_locked: bool = Field(default=False)


class StateManager:
    """Handles loading and saving the application's persistent state."""

    def __init__(self, file_path: Path):
        self._file_path = file_path
        self._state = self._load_state()

    def _load_state(self) -> AppState:
        """Loads state from JSON file, or returns default if not found/invalid."""
        if not self._file_path.exists():
            return AppState()
        try:
            with self._file_path.open("rb") as f:
                data = orjson.loads(f.read())
                return AppState(**data)
        except (orjson.JSONDecodeError, TypeError, ValueError, OSError) as e:
            logger.warning("Ignoring unreadable state file %s: %s", self._file_path, e)
            return AppState()

    def save_state(self):
        """Saves the current state to the JSON file."""
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            with self._file_path.open("wb") as f:
                f.write(orjson.dumps(self._state.model_dump()))
        except OSError as e:
            logger.error("Error saving application state: %s", e)

    @property
    def current_state(self) -> AppState:
        return self._state

    def update_character(self, character_id: int):
        self._state.last_character_id = character_id
        self.save_state()

    def update_mineral_price(self, name: str, price: Decimal):
        self._state.mineral_prices[name] = str(price)
        self.save_state()

    def update_prices_locked(self, locked: bool):
        self._state.prices_locked = locked
        self.save_state()


# A single instance for the application to use.
state_manager = StateManager(APP_DATA_DIR / "app_state.json")
