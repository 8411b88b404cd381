import logging
from decimal import Decimal
from typing import Optional

from PySide6.QtCore import Qt, Signal, Slot
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import QFormLayout, QGroupBox, QHBoxLayout, QLabel, QLineEdit

from src.wallet_core.models import Item
from src.wallet_core.sales import (
    compute_subtotal,
    format_price,
    format_quantity,
    get_item_by_name,
    parse_price,
    price_from_text,
    quantity_from_text,
)

logger = logging.getLogger(__name__)

ICON_SIZE = 64


class MineralTile(QGroupBox):
    """
    One mineral of the sales worksheet: icon, stock, last sell price and subtotal.

    The tile does no networking itself. Setting `mineral_name` emits
    `icon_requested` with the item's type id; whoever fetches the icon hands it
    back through `on_icon_loaded`.
    """

    subtotal_changed = Signal(object)
    mineral_price_changed = Signal(object)
    icon_requested = Signal(int)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._mineral: Optional[Item] = None
        self._subtotal = Decimal(0)

        self.icon = QLabel()
        self.icon.setFixedSize(ICON_SIZE, ICON_SIZE)

        self.txt_stock = QLineEdit("0")
        self.txt_last_sell = QLineEdit(format_price(Decimal(0)))
        self.tb_subtotal = QLineEdit(format_price(Decimal(0)))
        self.tb_subtotal.setReadOnly(True)
        self.tb_subtotal.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        for field in (self.txt_stock, self.txt_last_sell, self.tb_subtotal):
            field.setAlignment(Qt.AlignmentFlag.AlignRight)

        form = QFormLayout()
        form.addRow("Stock:", self.txt_stock)
        form.addRow("Last sell:", self.txt_last_sell)
        form.addRow("Subtotal:", self.tb_subtotal)

        layout = QHBoxLayout(self)
        layout.addWidget(self.icon, alignment=Qt.AlignmentFlag.AlignTop)
        layout.addLayout(form)

        self.txt_stock.textChanged.connect(self._on_stock_changed)
        self.txt_last_sell.textChanged.connect(self._on_last_sell_changed)

    @property
    def mineral_name(self) -> str:
        return self._mineral.name if self._mineral else self.title()

    @mineral_name.setter
    def mineral_name(self, value: str):
        self.setTitle(value)
        self._mineral = get_item_by_name(value)
        if self._mineral is None:
            logger.warning("Unknown mineral %r, no icon to fetch", value)
            self.show_blank_image()
            return
        self.icon_requested.emit(self._mineral.type_id)

    @property
    def mineral(self) -> Optional[Item]:
        return self._mineral

    @property
    def quantity(self) -> int:
        return quantity_from_text(self.txt_stock.text())

    @quantity.setter
    def quantity(self, value: int):
        self.txt_stock.setText(format_quantity(value))

    @property
    def price_per_unit(self) -> Decimal:
        return price_from_text(self.txt_last_sell.text())

    @price_per_unit.setter
    def price_per_unit(self, value: Decimal):
        self.txt_last_sell.setText(format_price(value))

    @property
    def price_locked(self) -> bool:
        return self.txt_last_sell.isReadOnly()

    @price_locked.setter
    def price_locked(self, value: bool):
        self.txt_last_sell.setReadOnly(value)
        self.txt_last_sell.setFocusPolicy(
            Qt.FocusPolicy.NoFocus if value else Qt.FocusPolicy.StrongFocus
        )

    @property
    def subtotal(self) -> Decimal:
        return self._subtotal

    @Slot(int, object)
    def on_icon_loaded(self, type_id: int, image: Optional[bytes]):
        """Shows a fetched icon if it belongs to the mineral currently displayed."""
        if self._mineral is None or self._mineral.type_id != type_id:
            return
        pixmap = QPixmap()
        if image and pixmap.loadFromData(image):
            self.icon.setPixmap(
                pixmap.scaled(
                    ICON_SIZE, ICON_SIZE,
                    Qt.AspectRatioMode.KeepAspectRatio,
                    Qt.TransformationMode.SmoothTransformation,
                )
            )
        else:
            self.show_blank_image()

    def show_blank_image(self):
        """Fills the icon area with the background colour as a placeholder."""
        blank = QPixmap(self.icon.size())
        blank.fill(self.palette().color(self.backgroundRole()))
        self.icon.setPixmap(blank)

    def _update_subtotal(self):
        self._subtotal = compute_subtotal(
            self.txt_stock.text(), self.txt_last_sell.text()
        )
        self.tb_subtotal.setText(format_price(self._subtotal))
        self.subtotal_changed.emit(self._subtotal)

    def _on_stock_changed(self, _text: str):
        self._update_subtotal()

    def _on_last_sell_changed(self, text: str):
        self._update_subtotal()
        self.mineral_price_changed.emit(parse_price(text))
