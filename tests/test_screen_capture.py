import unittest

from arbiter.desktop_media_id import DesktopMediaId
from arbiter.screen import ScreenCaptureResolver
from core.contracts import (
    CaptureRequest,
    MediaStreamDevice,
    MediaStreamType,
    ResultCode,
)

T = MediaStreamType


class TestScreenCaptureResolver(unittest.TestCase):
    def setUp(self):
        self.resolver = ScreenCaptureResolver()

    def test_tab_audio_only(self):
        devices, result = self.resolver.resolve(
            CaptureRequest(audio_type=T.GUM_TAB_AUDIO_CAPTURE)
        )
        self.assertEqual(result, ResultCode.OK)
        self.assertEqual(devices, [MediaStreamDevice(T.GUM_TAB_AUDIO_CAPTURE, "", "")])

    def test_desktop_video_without_id_targets_full_desktop(self):
        devices, result = self.resolver.resolve(
            CaptureRequest(video_type=T.GUM_DESKTOP_VIDEO_CAPTURE)
        )
        self.assertEqual(result, ResultCode.OK)
        self.assertEqual(len(devices), 1)
        self.assertEqual(devices[0].type, T.GUM_DESKTOP_VIDEO_CAPTURE)
        self.assertEqual(devices[0].id, "screen:-1:0")
        self.assertEqual(devices[0].name, "Screen")

    def test_desktop_video_uses_requested_window(self):
        devices, _ = self.resolver.resolve(
            CaptureRequest(
                video_type=T.GUM_DESKTOP_VIDEO_CAPTURE,
                requested_video_device_id="window:42:7",
            )
        )
        self.assertEqual(devices[0].id, "window:42:7")

    def test_desktop_video_with_malformed_id_gets_no_target(self):
        devices, result = self.resolver.resolve(
            CaptureRequest(
                video_type=T.GUM_DESKTOP_VIDEO_CAPTURE,
                requested_video_device_id="screen:1_0:0",
            )
        )
        self.assertEqual(result, ResultCode.OK)
        self.assertEqual(devices[0].id, "")
        self.assertEqual(devices[0].name, "Screen")

    def test_desktop_audio_and_video_together(self):
        devices, result = self.resolver.resolve(
            CaptureRequest(
                audio_type=T.GUM_DESKTOP_AUDIO_CAPTURE,
                video_type=T.GUM_DESKTOP_VIDEO_CAPTURE,
                requested_video_device_id="screen:3",
            )
        )
        self.assertEqual(result, ResultCode.OK)
        self.assertEqual(
            devices,
            [
                MediaStreamDevice(T.GUM_DESKTOP_AUDIO_CAPTURE, "loopback", "System Audio"),
                MediaStreamDevice(T.GUM_DESKTOP_VIDEO_CAPTURE, "screen:3:0", "Screen"),
            ],
        )

    def test_tab_audio_with_tab_video(self):
        devices, _ = self.resolver.resolve(
            CaptureRequest(
                audio_type=T.GUM_TAB_AUDIO_CAPTURE,
                video_type=T.GUM_TAB_VIDEO_CAPTURE,
            )
        )
        self.assertEqual(
            [d.type for d in devices],
            [T.GUM_TAB_AUDIO_CAPTURE, T.GUM_TAB_VIDEO_CAPTURE],
        )

    def test_hardware_kinds_are_ignored(self):
        devices, result = self.resolver.resolve(
            CaptureRequest(
                audio_type=T.DEVICE_AUDIO_CAPTURE,
                video_type=T.DEVICE_VIDEO_CAPTURE,
            )
        )
        self.assertEqual(devices, [])
        self.assertEqual(result, ResultCode.NO_HARDWARE)


class TestDesktopMediaId(unittest.TestCase):
    def test_parse_accepts_two_and_three_parts(self):
        cases = [
            ("screen:5", DesktopMediaId("screen", 5, 0)),
            ("screen:-1:0", DesktopMediaId("screen", -1, 0)),
            ("window:12:99", DesktopMediaId("window", 12, 99)),
        ]
        for raw, expected in cases:
            with self.subTest(raw=raw):
                self.assertEqual(DesktopMediaId.parse(raw), expected)

    def test_parse_rejects_malformed(self):
        cases = (
            "",
            "screen",
            "tab:1:2",
            "screen:x:0",
            "screen:1:2:3",
            "screen:1_0:0",
            "screen: 5",
            "screen:5 :0",
            "window:+3:0",
            "window:3:\u0663",
            "screen:-:0",
        )
        for raw in cases:
            with self.subTest(raw=raw):
                parsed = DesktopMediaId.parse(raw)
                self.assertTrue(parsed.is_null)
                self.assertEqual(parsed.to_string(), "")

    def test_full_desktop_sentinel(self):
        self.assertEqual(str(DesktopMediaId.full_desktop()), "screen:-1:0")


if __name__ == "__main__":
    unittest.main()
