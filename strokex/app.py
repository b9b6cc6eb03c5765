"""Application entry point and setup for the StrokeX puzzle game."""

import logging
import os
import sys
from pathlib import Path

from PySide6.QtGui import QGuiApplication, QIcon
from PySide6.QtWidgets import QApplication

from strokex.core.levels import LevelRepository
from strokex.core.session import GameSession
from strokex.ui.main_window import MainWindow


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def unlock_all_requested() -> bool:
    return os.environ.get("STROKEX_UNLOCK_ALL") == "1"


def create_session(levels: LevelRepository) -> GameSession:
    """Build the game session, honoring the STROKEX_UNLOCK_ALL switch."""
    session = GameSession(levels)
    if unlock_all_requested():
        session.progress.unlock_all()
        logging.info("All %d levels unlocked (STROKEX_UNLOCK_ALL)", levels.count())
    return session


def run() -> None:
    """Initialize the application, load the level catalog, and show the main window."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("StrokeX")
    app.setApplicationDisplayName("StrokeX")

    levels = LevelRepository()
    session = create_session(levels)

    icon_path = Path(__file__).parent / "assets" / "logo.png"
    if icon_path.exists():
        app.setWindowIcon(QIcon(str(icon_path)))
    else:
        logging.debug("No window icon at %s", icon_path)

    window = MainWindow(levels=levels, session=session)
    screen = QGuiApplication.primaryScreen()
    if screen is not None:
        window.setGeometry(screen.availableGeometry())
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
