import logging

from PySide6.QtCore import QEvent, Qt, Slot
from PySide6.QtWidgets import QTabWidget, QVBoxLayout, QWidget

from src.ui_desktop.chart_widget import AmountChartWidget, BalanceChartWidget
from src.ui_desktop.controller import UIController
from src.wallet_core.analytics.journal import amount_points, balance_points, flow_summary
from src.wallet_core.repository import JournalRepository

logger = logging.getLogger(__name__)


class WalletJournalChartWindow(QWidget):
    """Balance and amount charts for one character's wallet journal."""

    def __init__(
        self,
        character_id: int,
        repository: JournalRepository,
        controller: UIController,
        parent=None,
    ):
        super().__init__(parent, Qt.WindowType.Window)
        self.setAttribute(Qt.WidgetAttribute.WA_DeleteOnClose)
        self.resize(800, 500)

        self._character_id = character_id
        self._repository = repository
        self._controller = controller
        self._subscribed = False

        character = repository.get(character_id)
        name = character.name if character else str(character_id)
        self.setWindowTitle(f"{name} - Wallet Journal Charts")

        self.tabs = QTabWidget()
        self.balance_chart = BalanceChartWidget()
        self.amount_chart = AmountChartWidget()
        self.tabs.addTab(self.balance_chart, "Balance")
        self.tabs.addTab(self.amount_chart, "Amount")

        layout = QVBoxLayout(self)
        layout.addWidget(self.tabs)

    @property
    def character_id(self) -> int:
        return self._character_id

    def showEvent(self, event: QEvent):  # noqa: N802 - Qt override
        super().showEvent(event)
        if self._subscribed:
            return
        self.setMinimumSize(self.size())
        self._controller.journal_updated.connect(self.on_journal_updated)
        self._subscribed = True
        self.update_charts()

    def closeEvent(self, event: QEvent):  # noqa: N802 - Qt override
        if self._subscribed:
            self._controller.journal_updated.disconnect(self.on_journal_updated)
            self._subscribed = False
        event.accept()

    @Slot(int)
    def on_journal_updated(self, character_id: int):
        if character_id != self._character_id:
            return
        self.update_charts()

    def update_charts(self):
        """Re-renders both charts from the character's current journal."""
        character = self._repository.get(self._character_id)
        journal = character.wallet_journal if character else []
        logger.debug(
            "Rendering %d journal entries for character %s",
            len(journal), self._character_id,
        )
        self.balance_chart.set_series(balance_points(journal))
        self.amount_chart.set_data(amount_points(journal), flow_summary(journal))
