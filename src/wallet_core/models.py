from datetime import datetime, timezone
from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field, field_validator


class WalletJournalEntry(BaseModel):
    """A single line of a character's wallet journal."""
    ref_id: int
    date: datetime
    amount: Decimal
    balance: Decimal
    ref_type: str = ""
    description: str = ""

    @field_validator("date")
    @classmethod
    def _require_timezone(cls, value: datetime) -> datetime:
        # Journal timestamps are UTC; naive values are taken as UTC too.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class Character(BaseModel):
    character_id: int
    name: str
    wallet_journal: List[WalletJournalEntry] = Field(default_factory=list)


class Item(BaseModel):
    """A tradable game item, identified by its type id."""
    type_id: int
    name: str


class WalletJournalUpdated(BaseModel):
    """Published whenever a character's wallet journal changes."""
    character_id: int
