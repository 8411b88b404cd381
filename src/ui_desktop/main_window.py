from decimal import Decimal
from typing import Dict

from PySide6.QtCore import QEvent, Qt, Slot
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QToolBar,
    QVBoxLayout,
    QWidget,
)

from src.ui_desktop.controller import UIController
from src.ui_desktop.mineral_tile import MineralTile
from src.ui_desktop.wallet_journal_chart_window import WalletJournalChartWindow
from src.wallet_core.config import AppConfig
from src.wallet_core.repository import JournalRepository
from src.wallet_core.sales import MINERALS, Worksheet, format_price, parse_price
from src.wallet_core.state_manager import StateManager

TILE_COLUMNS = 4


class MainWindow(QMainWindow):
    def __init__(
        self,
        config: AppConfig,
        repository: JournalRepository,
        state_manager: StateManager,
        controller: UIController | None = None,
    ):
        super().__init__()
        self.setWindowTitle("Wallet Monitor")
        self.setGeometry(100, 100, 1100, 600)

        self._repository = repository
        self._state_manager = state_manager
        self._chart_windows: Dict[int, WalletJournalChartWindow] = {}

        self.controller = controller or UIController(config, repository)
        self.controller.journal_updated.connect(self.on_journal_updated)

        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        self.layout = QHBoxLayout(central_widget)

        self.character_list = QListWidget()
        self.character_list.setMaximumWidth(220)
        self.character_list.itemDoubleClicked.connect(self.open_chart_window)
        self.character_list.currentItemChanged.connect(self.on_character_changed)
        self.layout.addWidget(self.character_list)

        self.worksheet = Worksheet(item.name for item in MINERALS)
        self.tiles: Dict[str, MineralTile] = {}
        self.layout.addWidget(self._build_worksheet())

        toolbar = QToolBar("Main Toolbar")
        self.addToolBar(toolbar)
        charts_action = QAction("Wallet charts", self)
        charts_action.triggered.connect(lambda: self.open_chart_window())
        toolbar.addAction(charts_action)
        reload_action = QAction("Reload journals", self)
        reload_action.triggered.connect(self.controller.reload_journals)
        toolbar.addAction(reload_action)
        self.lock_action = QAction("Lock prices", self)
        self.lock_action.setCheckable(True)
        self.lock_action.toggled.connect(self.on_lock_toggled)
        toolbar.addAction(self.lock_action)

        self._populate_characters()
        self._load_initial_state()

    def _build_worksheet(self) -> QGroupBox:
        box = QGroupBox("Mineral worksheet")
        grid = QGridLayout()
        for index, item in enumerate(MINERALS):
            tile = MineralTile()
            tile.icon_requested.connect(self.controller.request_icon)
            self.controller.icon_loaded.connect(tile.on_icon_loaded)
            tile.subtotal_changed.connect(
                lambda subtotal, name=item.name: self.on_subtotal_changed(name, subtotal)
            )
            tile.mineral_price_changed.connect(
                lambda price, name=item.name: self.on_mineral_price_changed(name, price)
            )
            tile.mineral_name = item.name
            self.tiles[item.name] = tile
            grid.addWidget(tile, index // TILE_COLUMNS, index % TILE_COLUMNS)

        self.total_label = QLabel()
        self.total_label.setAlignment(Qt.AlignmentFlag.AlignRight)
        self._show_total()

        box_layout = QVBoxLayout(box)
        box_layout.addLayout(grid)
        box_layout.addWidget(self.total_label)
        box_layout.addStretch()
        return box

    def _populate_characters(self):
        self.character_list.clear()
        for character in self._repository.characters():
            item = QListWidgetItem(character.name)
            item.setData(Qt.ItemDataRole.UserRole, character.character_id)
            self.character_list.addItem(item)

    def _load_initial_state(self):
        """Restores the last character, saved prices and the lock state."""
        state = self._state_manager.current_state
        for name, price in state.mineral_prices.items():
            tile = self.tiles.get(name)
            if tile is not None:
                tile.price_per_unit = parse_price(price)
        self.lock_action.setChecked(state.prices_locked)

        for row in range(self.character_list.count()):
            item = self.character_list.item(row)
            if item.data(Qt.ItemDataRole.UserRole) == state.last_character_id:
                self.character_list.setCurrentItem(item)
                return
        if self.character_list.count():
            self.character_list.setCurrentRow(0)

    def _show_total(self):
        self.total_label.setText(f"Total: {format_price(self.worksheet.total)} ISK")

    def on_character_changed(self, current: QListWidgetItem, _previous: QListWidgetItem):
        if current:
            self._state_manager.update_character(current.data(Qt.ItemDataRole.UserRole))

    def open_chart_window(self, item: QListWidgetItem | None = None):
        item = item or self.character_list.currentItem()
        if item is None:
            return
        character_id = item.data(Qt.ItemDataRole.UserRole)
        window = self._chart_windows.get(character_id)
        if window is None:
            window = WalletJournalChartWindow(character_id, self._repository, self.controller)
            window.destroyed.connect(
                lambda _=None, cid=character_id: self._chart_windows.pop(cid, None)
            )
            self._chart_windows[character_id] = window
        window.show()
        window.raise_()
        window.activateWindow()

    @Slot(int)
    def on_journal_updated(self, _character_id: int):
        # A reload may add or rename characters.
        current = self.character_list.currentItem()
        current_id = current.data(Qt.ItemDataRole.UserRole) if current else None
        self.character_list.blockSignals(True)
        self._populate_characters()
        for row in range(self.character_list.count()):
            if self.character_list.item(row).data(Qt.ItemDataRole.UserRole) == current_id:
                self.character_list.setCurrentRow(row)
        self.character_list.blockSignals(False)

    def on_subtotal_changed(self, name: str, subtotal: Decimal):
        self.worksheet.set_subtotal(name, subtotal)
        self._show_total()

    def on_mineral_price_changed(self, name: str, price: Decimal):
        self._state_manager.update_mineral_price(name, price)

    def on_lock_toggled(self, locked: bool):
        for tile in self.tiles.values():
            tile.price_locked = locked
        self._state_manager.update_prices_locked(locked)

    def closeEvent(self, event: QEvent):  # noqa: N802 - Qt override
        """Ensure a graceful shutdown on window close."""
        for window in list(self._chart_windows.values()):
            window.close()
        self.controller.shutdown()
        event.accept()
