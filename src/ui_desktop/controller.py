import asyncio
import logging
from concurrent.futures import Future
from typing import Coroutine, Optional

from PySide6.QtCore import QObject, QThread, Signal

from src.wallet_core.config import AppConfig
from src.wallet_core.models import WalletJournalUpdated
from src.wallet_core.networking.image_service import ImageService
from src.wallet_core.repository import JournalRepository
from src.wallet_core.services.publisher import Publisher, wallet_journal_publisher

logger = logging.getLogger(__name__)


class AsyncWorker(QObject):
    """
    Runs the asyncio event loop in a separate thread to avoid blocking the GUI.
    """

    def __init__(self, image_service: ImageService):
        super().__init__()
        self.loop = asyncio.new_event_loop()
        self.image_service = image_service

    def run(self):
        """The main entry point for the thread."""
        asyncio.set_event_loop(self.loop)
        self.loop.run_forever()

    async def stop_all_async(self):
        """Coroutine to gracefully shut down all async tasks."""
        await self.image_service.aclose()
        current = asyncio.current_task()
        for task in asyncio.all_tasks():
            if task is not current:
                task.cancel()


class UIController(QObject):
    """
    Bridges the async core (journal updates, icon downloads) and the Qt UI.
    """

    # Signals to emit data to the main UI thread
    journal_updated = Signal(int)
    icon_loaded = Signal(int, object)

    def __init__(
        self,
        config: AppConfig,
        repository: JournalRepository,
        publisher: Publisher = wallet_journal_publisher,
        image_service: Optional[ImageService] = None,
    ):
        super().__init__()
        self._repository = repository
        self._publisher = publisher
        self._async_worker = AsyncWorker(image_service or ImageService(config))
        self._thread = QThread()
        self._async_worker.moveToThread(self._thread)

        self._thread.started.connect(self._async_worker.run)
        self._thread.start()

        self._submit(self._listen_for_updates())

    @property
    def is_running(self) -> bool:
        return self._thread.isRunning()

    def _submit(self, coro: Coroutine) -> Future:
        future = asyncio.run_coroutine_threadsafe(coro, self._async_worker.loop)
        future.add_done_callback(self._log_failure)
        return future

    @staticmethod
    def _log_failure(future: Future):
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            logger.error("Background task failed: %s", error, exc_info=error)

    async def _listen_for_updates(self):
        """Forwards journal update events from the publisher as Qt signals."""
        queue = self._publisher.subscribe()
        try:
            while True:
                event: WalletJournalUpdated = await queue.get()
                self.journal_updated.emit(event.character_id)
                queue.task_done()
        finally:
            self._publisher.unsubscribe(queue)

    def request_icon(self, type_id: int):
        """Starts an icon download; the result arrives through `icon_loaded`."""
        self._submit(self._fetch_icon_async(type_id))

    async def _fetch_icon_async(self, type_id: int):
        image = await self._async_worker.image_service.fetch_type_icon(type_id)
        if image is None:
            logger.info("No icon available for type %s", type_id)
        self.icon_loaded.emit(type_id, image)

    def reload_journals(self):
        logger.info("UIController: Reloading wallet journals")
        self._submit(self._repository.reload())

    def shutdown(self):
        """Gracefully shuts down the async worker and the thread."""
        if not self.is_running:
            return
        logger.info("UIController: Shutting down...")
        future = asyncio.run_coroutine_threadsafe(
            self._async_worker.stop_all_async(), self._async_worker.loop
        )
        try:
            future.result(timeout=5)  # Wait for shutdown to complete
        except TimeoutError:
            logger.error("Async worker shutdown timed out.")
        self._async_worker.loop.call_soon_threadsafe(self._async_worker.loop.stop)
        self._thread.quit()
        self._thread.wait()
        self._async_worker.loop.close()
        logger.info("UIController: Shutdown complete.")
