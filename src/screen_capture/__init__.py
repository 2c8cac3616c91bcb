"""
screen-capture - coordinate-correct screen captures across displays.

Components:
- geometry: Rect/Region types and rectangle math
- displays: display model, enumeration and target resolution
- compositor: pixel buffers, channel orders and canvas compositing
- capture: native backend, rect sanitizer and capture orchestrator
"""

__version__ = "0.1.0"
