"""Allow running FocusBoard as a module: python -m focusboard."""

import logging
import os
import sys

from PyQt6.QtWidgets import QApplication

from .app import FocusBoardApp


def main() -> None:
    logging.basicConfig(
        level=os.environ.get("FOCUSBOARD_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv)
    app.setApplicationName("FocusBoard")
    app.setOrganizationName("FocusBoard")

    window = FocusBoardApp()
    window.show()

    exit_code = app.exec()
    window.save()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
