from decimal import Decimal

import pytest
from PySide6.QtCore import Qt
from PySide6.QtGui import QColor

from src.ui_desktop.mineral_tile import MineralTile
from src.wallet_core.exceptions import InvalidInputError


@pytest.fixture
def tile(qtbot):
    widget = MineralTile()
    qtbot.addWidget(widget)
    return widget


class TestSubtotal:
    def test_editing_stock_updates_subtotal(self, tile, qtbot):
        tile.price_per_unit = Decimal("4.25")
        with qtbot.waitSignal(tile.subtotal_changed) as blocker:
            tile.txt_stock.setText("1000")

        assert blocker.args == [Decimal("4250.00")]
        assert tile.subtotal == Decimal("4250.00")
        assert tile.tb_subtotal.text() == "4,250.00"

    def test_editing_price_emits_price_and_subtotal(self, tile, qtbot):
        tile.quantity = 3
        with qtbot.waitSignals([tile.subtotal_changed, tile.mineral_price_changed]):
            tile.txt_last_sell.setText("1,000.50")

        assert tile.subtotal == Decimal("3001.50")

    def test_unparseable_input_gives_zero_subtotal(self, tile):
        tile.quantity = 10
        tile.txt_last_sell.setText("abc")

        assert tile.subtotal == Decimal(0)
        assert tile.tb_subtotal.text() == "0.00"

    def test_zero_subtotal_shows_without_sign(self, tile):
        tile.quantity = 0
        tile.txt_last_sell.setText("-1")

        assert tile.tb_subtotal.text() == "0.00"

    def test_underscore_grouping_is_not_a_number(self, tile):
        tile.price_per_unit = Decimal("2")
        tile.txt_stock.setText("1_000")

        assert tile.subtotal == Decimal(0)

    def test_strict_getters_raise(self, tile):
        tile.txt_stock.setText("many")
        with pytest.raises(InvalidInputError):
            _ = tile.quantity

    def test_price_setter_uses_number_format(self, tile):
        tile.price_per_unit = Decimal("1234.5")
        assert tile.txt_last_sell.text() == "1,234.50"
        assert tile.price_per_unit == Decimal("1234.50")


class TestPriceLock:
    def test_lock_makes_price_read_only(self, tile):
        tile.price_locked = True
        assert tile.price_locked
        assert tile.txt_last_sell.isReadOnly()
        assert tile.txt_last_sell.focusPolicy() == Qt.FocusPolicy.NoFocus

        tile.price_locked = False
        assert not tile.txt_last_sell.isReadOnly()


class TestIcon:
    def test_setting_name_requests_icon(self, tile, qtbot):
        with qtbot.waitSignal(tile.icon_requested) as blocker:
            tile.mineral_name = "Pyerite"

        assert blocker.args == [35]
        assert tile.title() == "Pyerite"
        assert tile.mineral_name == "Pyerite"

    def test_unknown_name_shows_blank(self, tile, qtbot):
        with qtbot.assertNotEmitted(tile.icon_requested):
            tile.mineral_name = "Veldspar Dust"

        assert tile.mineral is None
        assert tile.mineral_name == "Veldspar Dust"
        assert not tile.icon.pixmap().isNull()

    def test_icon_for_current_mineral_is_shown(self, tile, png_bytes):
        tile.mineral_name = "Tritanium"
        tile.on_icon_loaded(34, png_bytes)

        pixmap = tile.icon.pixmap()
        assert not pixmap.isNull()
        assert pixmap.toImage().pixelColor(0, 0) == QColor(Qt.GlobalColor.red)

    def test_icon_for_other_mineral_is_ignored(self, tile, png_bytes):
        tile.mineral_name = "Tritanium"
        tile.on_icon_loaded(35, png_bytes)
        assert tile.icon.pixmap().isNull()

    def test_missing_image_shows_blank(self, tile):
        tile.mineral_name = "Tritanium"
        tile.on_icon_loaded(34, None)

        pixmap = tile.icon.pixmap()
        assert not pixmap.isNull()
        assert pixmap.toImage().pixelColor(0, 0) != QColor(Qt.GlobalColor.red)
