import os
from datetime import datetime, timezone
from decimal import Decimal

import pytest

# Widgets are created without a display in CI.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from src.wallet_core.models import Character, WalletJournalEntry  # noqa: E402


@pytest.fixture
def journal():
    """A small journal, deliberately out of date order."""
    return [
        WalletJournalEntry(
            ref_id=3, date=datetime(2026, 3, 3, 12, 0, tzinfo=timezone.utc),
            amount=Decimal("-250.25"), balance=Decimal("1749.75"),
            ref_type="market_escrow",
        ),
        WalletJournalEntry(
            ref_id=1, date=datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc),
            amount=Decimal("1000"), balance=Decimal("1000"),
            ref_type="bounty_prizes",
        ),
        WalletJournalEntry(
            ref_id=2, date=datetime(2026, 3, 2, 18, 15, tzinfo=timezone.utc),
            amount=Decimal("1000"), balance=Decimal("2000"),
            ref_type="market_transaction",
        ),
    ]


@pytest.fixture
def character(journal):
    return Character(character_id=90000001, name="Aura Ralen", wallet_journal=journal)


@pytest.fixture
def png_bytes(qapp):
    """A real 8x8 red PNG, encoded by Qt."""
    from PySide6.QtCore import QBuffer, QIODevice, Qt
    from PySide6.QtGui import QImage

    image = QImage(8, 8, QImage.Format.Format_RGB32)
    image.fill(Qt.GlobalColor.red)
    buffer = QBuffer()
    buffer.open(QIODevice.OpenModeFlag.WriteOnly)
    image.save(buffer, "PNG")
    return bytes(buffer.data())


class IconServer:
    """Mock image server: only Tritanium (34) has an icon, and only on the CDN."""

    def __init__(self, png: bytes):
        self.png = png
        self.urls = []

    def __call__(self, request):
        import httpx

        self.urls.append(str(request.url))
        if request.url.host == "images.evetech.net" and request.url.path == "/types/34/icon":
            return httpx.Response(200, content=self.png)
        return httpx.Response(404)


@pytest.fixture
def icon_server(png_bytes):
    return IconServer(png_bytes)


@pytest.fixture
def image_service(icon_server):
    import httpx

    from src.wallet_core.config import AppConfig
    from src.wallet_core.networking.image_service import ImageService

    client = httpx.AsyncClient(transport=httpx.MockTransport(icon_server))
    return ImageService(AppConfig(max_retries=1), client=client)
