# Rev 0.1.0

# ganttz/ui/window_mode.py
from PySide6.QtCore import Qt, QRect
from PySide6.QtGui import QGuiApplication


def available_rect(win) -> QRect:
    """Work area of the screen the window sits on (taskbar excluded)."""
    screen = QGuiApplication.screenAt(win.frameGeometry().center()) or QGuiApplication.primaryScreen()
    return screen.availableGeometry()


def fit_to_screen(win, *, width: int, height: int, center: bool = True):
    """Resize to the configured size, capped at the work area, and center it."""
    rect = available_rect(win)
    w, h = min(width, rect.width()), min(height, rect.height())
    win.resize(w, h)
    if center:
        win.move(rect.x() + (rect.width() - w) // 2, rect.y() + (rect.height() - h) // 2)


def lock_dialog_fixed(win, *, width_ratio: float, height_ratio: float):
    """Non-resizable dialog sized as a fraction of the work area."""
    rect = available_rect(win)
    win.setFixedSize(int(rect.width() * width_ratio), int(rect.height() * height_ratio))
    win.setWindowFlag(Qt.WindowMaximizeButtonHint, False)
