from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from PyQt6.QtWidgets import QApplication

from ClickHeatmap.core.settings import SettingsManager
from ClickHeatmap.ui.main_window import MainWindow


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Click-test heatmap viewer")
    ap.add_argument("--image", default=None, help="task image to open")
    ap.add_argument("--clicks", default=None, help="click export (.csv or .json) to open")
    ap.add_argument("--tasks", default=None, help="task list (.json) with each task's question")
    ap.add_argument("--question", default=None, help="question text to show above the image")
    ap.add_argument("--debug", action="store_true", help="verbose logging")
    args = ap.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication.instance() or QApplication(sys.argv[:1])
    win = MainWindow(SettingsManager())
    if args.image:
        win.load_image(args.image)
    if args.clicks:
        win.load_clicks(args.clicks)
    if args.tasks:
        win.load_tasks(args.tasks)
    if args.question:
        win.set_question(args.question)
    win.show()
    return int(app.exec())


if __name__ == "__main__":
    raise SystemExit(main())
