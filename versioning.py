"""Centralised version and naming information.

Single source of truth for the application name and version; the preview
CLI and QApplication metadata both read it.
"""

APP_NAME: str = "LessonIllustrations"
APP_VERSION: str = "0.3.0"
APP_DESCRIPTION: str = "Scroll-triggered, staggered reveal animations for lesson diagrams."
APP_ORGANIZATION: str = "LessonIllustrations"


__all__ = [
    "APP_NAME",
    "APP_VERSION",
    "APP_DESCRIPTION",
    "APP_ORGANIZATION",
]
