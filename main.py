"""
Lesson Illustrations - preview entry point.

Opens one illustration inside a scrollable window with a tall spacer above
it, so the scroll-into-view trigger can be exercised by hand.
"""
import argparse
import sys
from typing import List, Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QApplication, QLabel, QScrollArea, QVBoxLayout, QWidget

from core.animation import AnimationManager
from core.events import EventSystem, EventType
from core.logging.logger import get_logger, setup_logging
from core.settings import SettingsManager
from illustrations import get_illustration, list_illustrations
from versioning import APP_DESCRIPTION, APP_NAME, APP_ORGANIZATION, APP_VERSION

logger = get_logger(__name__)

SPACER_HEIGHT = 1200


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="illustrations",
        description=APP_DESCRIPTION,
    )
    parser.add_argument("name", nargs="?", help="Illustration to open (see --list).")
    parser.add_argument("--list", action="store_true", help="Print the illustration catalog and exit.")
    parser.add_argument("--fps", type=int, default=None,
                        help="Override the tick rate (animation.fps setting).")
    parser.add_argument("--margin", type=float, default=None,
                        help="Visibility margin in px (negative shrinks the viewport).")
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging.")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable per-tick diagnostics (implies --debug).")
    parser.add_argument("--version", action="version", version=f"{APP_NAME} {APP_VERSION}")
    return parser


def build_preview_window(view: QWidget, title: str) -> QScrollArea:
    """Scroll area holding a spacer, the illustration and a trailing spacer."""
    content = QWidget()
    layout = QVBoxLayout(content)
    hint = QLabel("Scroll down to reveal the illustration")
    hint.setAlignment(Qt.AlignmentFlag.AlignHCenter | Qt.AlignmentFlag.AlignTop)
    hint.setMinimumHeight(SPACER_HEIGHT)
    layout.addWidget(hint)
    view.setMinimumHeight(view.sizeHint().height())
    layout.addWidget(view)
    layout.addSpacing(SPACER_HEIGHT // 2)

    window = QScrollArea()
    window.setWidgetResizable(True)
    window.setWidget(content)
    window.setWindowTitle(f"{title} - {APP_NAME}")
    window.resize(720, 600)
    return window


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the preview application."""
    args = build_parser().parse_args(argv)

    if args.list:
        for name in list_illustrations():
            print(name)
        return 0
    if not args.name:
        build_parser().print_usage(sys.stderr)
        return 2

    setup_logging(debug=args.debug, verbose=args.verbose)
    logger.info("%s %s starting", APP_NAME, APP_VERSION)

    try:
        view_cls = get_illustration(args.name)
    except KeyError as e:
        logger.error(str(e))
        print(e.args[0], file=sys.stderr)
        return 2

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setOrganizationName(APP_ORGANIZATION)
    app.setApplicationVersion(APP_VERSION)

    settings = SettingsManager(APP_ORGANIZATION, APP_NAME)
    events = EventSystem()
    fps = args.fps if args.fps is not None else settings.get_int('animation.fps', 60)
    manager = AnimationManager(fps=fps, event_system=events)
    settings.settings_changed.connect(
        lambda key, value: events.publish(EventType.SETTINGS_CHANGED,
                                          data={"key": key, "value": value}, source=settings)
    )

    exit_code = 0
    try:
        view = view_cls(manager, settings=settings, event_system=events, margin_px=args.margin)
        window = build_preview_window(view, view_cls.TITLE)
        window.show()
        exit_code = app.exec()
        view.teardown()
    except Exception as e:
        logger.exception(f"Fatal error in main: {e}")
        exit_code = 1
    finally:
        manager.cleanup()

    logger.info("%s exiting (code=%s)", APP_NAME, exit_code)
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
