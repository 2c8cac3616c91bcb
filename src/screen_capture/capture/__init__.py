"""
Capture module - native backend, rect sanitizer and orchestrator.
"""

from screen_capture.capture.backend import CaptureBackend, MssBackend, create_backend
from screen_capture.capture.sanitizer import sanitize
from screen_capture.capture.orchestrator import ScreenCapture

__all__ = [
    "CaptureBackend",
    "MssBackend",
    "create_backend",
    "sanitize",
    "ScreenCapture",
]
