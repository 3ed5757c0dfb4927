# Rev 0.1.0

# ganttz/main.py  (Rev 0.1.0)
import sys
from PySide6.QtGui import QGuiApplication, QFont
from PySide6.QtCore import Qt, QCoreApplication
from PySide6.QtWidgets import QApplication

from ganttz.app_context import AppContext
from ganttz.ui.main_window import MainWindow
from ganttz.utils.logging_setup import setup_logging
from ganttz.utils.paths import ensure_dirs


def main():
    QGuiApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )
    app = QApplication(sys.argv)
    QCoreApplication.setOrganizationName("ganttZ")
    QCoreApplication.setApplicationName("ganttZ")

    ensure_dirs()
    logfile = setup_logging("ganttZ")
    print(f"[logging] Writing to: {logfile}")

    # --- DI wiring ---
    ctx = AppContext.create()

    # --- UI ---
    win = MainWindow(ctx)
    win.show()

    app.setProperty("mainWindow", win)
    app.setFont(QFont("Sans Serif", 10))
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
