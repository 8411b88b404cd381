"""Quantity/price arithmetic behind the mineral worksheet."""

import logging
import re
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from src.wallet_core.exceptions import InvalidInputError
from src.wallet_core.formatting import format_number
from src.wallet_core.models import Item

logger = logging.getLogger(__name__)

# Integer text: optional sign, plain digits.
QUANTITY_PATTERN = re.compile(r"[+-]?[0-9]+")
# Decimal text: optional sign, digits with thousands separators, optional fraction.
PRICE_PATTERN = re.compile(r"[+-]?(?:[0-9][0-9,]*(?:\.[0-9]*)?|\.[0-9]+)")

MINERALS: List[Item] = [
    Item(type_id=34, name="Tritanium"),
    Item(type_id=35, name="Pyerite"),
    Item(type_id=36, name="Mexallon"),
    Item(type_id=37, name="Isogen"),
    Item(type_id=38, name="Nocxium"),
    Item(type_id=39, name="Zydrine"),
    Item(type_id=40, name="Megacyte"),
    Item(type_id=11399, name="Morphite"),
]

_ITEMS_BY_NAME: Dict[str, Item] = {item.name.lower(): item for item in MINERALS}


def get_item_by_name(name: str) -> Optional[Item]:
    return _ITEMS_BY_NAME.get(name.strip().lower())


def quantity_from_text(text: str) -> int:
    """Strictly parses a quantity field; thousands separators are rejected."""
    text = text.strip()
    if not QUANTITY_PATTERN.fullmatch(text):
        raise InvalidInputError(f"Not a quantity: {text!r}")
    return int(text)


def price_from_text(text: str) -> Decimal:
    """Strictly parses a price field, accepting the "N" format it is written in."""
    text = text.strip()
    if not PRICE_PATTERN.fullmatch(text):
        raise InvalidInputError(f"Not a price: {text!r}")
    return Decimal(text.replace(",", ""))


def parse_quantity(text: str) -> int:
    try:
        return quantity_from_text(text)
    except InvalidInputError:
        return 0


def parse_price(text: str) -> Decimal:
    try:
        return price_from_text(text)
    except InvalidInputError:
        return Decimal(0)


def format_price(value: Decimal) -> str:
    return format_number(value, 2)


def format_quantity(value: int) -> str:
    return str(value)


def compute_subtotal(quantity_text: str, price_text: str) -> Decimal:
    """price x quantity, where a field that does not parse counts as zero."""
    subtotal = parse_price(price_text) * parse_quantity(quantity_text)
    return subtotal.copy_abs() if subtotal.is_zero() else subtotal


class Worksheet:
    """Keeps the latest subtotal per mineral and the grand total over them."""

    def __init__(self, names: Iterable[str] = ()):
        self._subtotals: Dict[str, Decimal] = {name: Decimal(0) for name in names}

    def set_subtotal(self, name: str, subtotal: Decimal):
        self._subtotals[name] = subtotal
        logger.debug("Subtotal for %s is now %s", name, subtotal)

    @property
    def total(self) -> Decimal:
        return sum(self._subtotals.values(), Decimal(0))
