import logging
import sys

from PySide6.QtWidgets import QApplication, QMessageBox

from src.ui_desktop.main_window import MainWindow
from src.wallet_core.config import load_config
from src.wallet_core.exceptions import ConfigurationError, JournalLoadError
from src.wallet_core.logging_config import setup_logging
from src.wallet_core.repository import JournalRepository
from src.wallet_core.state_manager import state_manager

logger = logging.getLogger(__name__)


def main() -> int:
    try:
        config = load_config()
    except ConfigurationError as e:
        setup_logging()
        logger.error("%s (%s)", e.message, e.context.get("error"))
        return 1

    setup_logging(config.log_level, config.log_file)
    app = QApplication(sys.argv)

    repository = JournalRepository(config.journal_file)
    try:
        repository.load()
    except JournalLoadError as e:
        logger.error("%s (%s)", e.message, e.context.get("error"))
        QMessageBox.warning(None, "Wallet Monitor", e.message)

    window = MainWindow(config, repository, state_manager)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
