"""
Tests for the mss capture backend.
"""

from unittest.mock import MagicMock

import pytest

import screen_capture.capture.backend as backend_module
from screen_capture.capture.backend import MssBackend, create_backend
from screen_capture.compositor import ChannelOrder, Color
from screen_capture.geometry import Region


class FakeScreenShotError(Exception):
    pass


@pytest.fixture
def fake_mss(monkeypatch):
    sct = MagicMock()
    sct.__enter__.return_value = sct
    module = MagicMock()
    module.mss.return_value = sct
    module.exception.ScreenShotError = FakeScreenShotError

    monkeypatch.setattr(backend_module, "mss", module, raising=False)
    monkeypatch.setattr(backend_module, "HAS_MSS", True)
    return module, sct


class TestMssBackend:
    """Tests for MssBackend."""

    def test_grab_returns_bgra_buffer(self, run, fake_mss):
        module, sct = fake_mss
        shot = MagicMock()
        shot.bgra = bytes([10, 20, 30, 255] * 6)
        shot.width = 3
        shot.height = 2
        sct.grab.return_value = shot

        buffer = run(MssBackend().capture(Region(5, 6, 3, 2)))

        sct.grab.assert_called_once_with({"left": 5, "top": 6, "width": 3, "height": 2})
        assert buffer.channel_order is ChannelOrder.BGRA
        assert buffer.size == (3, 2)
        assert buffer.get_pixel_color(2, 1) == Color(30, 20, 10, 255)

    def test_with_cursor_passed_to_mss(self, run, fake_mss):
        module, sct = fake_mss
        sct.grab.side_effect = FakeScreenShotError("denied")
        run(MssBackend(with_cursor=True).capture(Region(0, 0, 1, 1)))
        module.mss.assert_called_once_with(with_cursor=True)

    def test_screenshot_error_returns_none(self, run, fake_mss):
        _, sct = fake_mss
        sct.grab.side_effect = FakeScreenShotError("out of bounds")
        assert run(MssBackend().capture(Region(9000, 9000, 10, 10))) is None

    def test_unavailable_returns_none(self, run, monkeypatch):
        monkeypatch.setattr(backend_module, "HAS_MSS", False)
        backend = MssBackend()
        assert backend.available is False
        assert run(backend.capture(Region(0, 0, 1, 1))) is None


class TestCreateBackend:
    """Tests for backend selection by name."""

    def test_mss_by_name(self, fake_mss):
        backend = create_backend("mss", with_cursor=True)
        assert isinstance(backend, MssBackend)
        assert backend.with_cursor is True

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown capture backend"):
            create_backend("dxcam")

    def test_screen_capture_uses_configured_backend(self, fake_mss, provider_factory):
        from screen_capture.capture import ScreenCapture
        from screen_capture.config import BackendConfig, CaptureConfig

        config = CaptureConfig(backend=BackendConfig(name="mss", with_cursor=True))
        capture = ScreenCapture(provider=provider_factory([]), config=config)
        assert isinstance(capture.backend, MssBackend)
        assert capture.backend.with_cursor is True
