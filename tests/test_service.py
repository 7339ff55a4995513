import unittest
from types import SimpleNamespace

from arbiter.arbiter import ArbiterState
from core.contracts import CaptureRequest, MediaStreamType, RequestType, ResultCode
from core.frames import FrameRegistry
from core.runtime import build_service_from_loaded_config

T = MediaStreamType


def _make_cfg(consent_type="decline", blocked=None, audio=None):
    return SimpleNamespace(
        runtime=SimpleNamespace(log_level="info"),
        catalog=SimpleNamespace(
            type="static",
            audio_devices=audio if audio is not None else [{"id": "mic", "name": "Mic"}],
            video_devices=[],
            default_audio_id="",
            default_video_id="",
        ),
        consent=SimpleNamespace(type=consent_type, blocked_origins=blocked or []),
    )


def _mic_request(origin="https://ok.test", frame_id=1):
    return CaptureRequest(
        render_process_id=10,
        render_frame_id=frame_id,
        audio_type=T.DEVICE_AUDIO_CAPTURE,
        request_type=RequestType.GENERATE_STREAM,
        security_origin=origin,
    )


class TestMediaAccessService(unittest.TestCase):
    def setUp(self):
        self.frames = FrameRegistry()
        self.frames.register_frame(10, 1, url="https://ok.test")
        self.results = []

    def _collect(self, devices, result):
        self.results.append((devices, result))

    def test_grants_and_counts(self):
        service = build_service_from_loaded_config(_make_cfg(), frames=self.frames)
        state = service.handle_request(_mic_request(), self._collect)
        self.assertEqual(state, ArbiterState.RESOLVED)
        self.assertEqual([d.id for d in self.results[0][0]], ["mic"])
        stats = service.stats()
        self.assertEqual(stats["total"], 1)
        self.assertEqual(stats["OK"], 1)
        self.assertEqual(stats["pending"], 0)

    def test_policy_denies_blocked_origin(self):
        cfg = _make_cfg("policy", blocked=["https://Blocked.test/"])
        service = build_service_from_loaded_config(cfg, frames=self.frames)
        state = service.handle_request(
            _mic_request(origin="https://blocked.test"), self._collect
        )
        self.assertEqual(state, ArbiterState.DELEGATED_TO_CONSENT)
        self.assertEqual(self.results, [([], ResultCode.PERMISSION_DENIED)])
        service.handle_request(_mic_request(), self._collect)
        self.assertEqual(self.results[1][1], ResultCode.OK)

    def test_missing_frame_resolves_shutdown_when_scope_ends(self):
        service = build_service_from_loaded_config(_make_cfg(), frames=self.frames)
        state = service.handle_request(_mic_request(frame_id=99), self._collect)
        self.assertEqual(state, ArbiterState.ABANDONED_NO_FRAME)
        self.assertEqual(self.results, [([], ResultCode.FAILED_DUE_TO_SHUTDOWN)])
        stats = service.stats()
        self.assertEqual(stats["abandoned_no_frame"], 1)
        self.assertEqual(stats["FAILED_DUE_TO_SHUTDOWN"], 1)

    def test_no_hardware(self):
        service = build_service_from_loaded_config(
            _make_cfg(audio=[]), frames=self.frames
        )
        service.handle_request(_mic_request(), self._collect)
        self.assertEqual(self.results, [([], ResultCode.NO_HARDWARE)])

    def test_handler_keeps_request_pending(self):
        parked = []
        service = build_service_from_loaded_config(
            _make_cfg("handler"),
            frames=self.frames,
            handler=lambda request, callback: parked.append(callback),
        )
        state = service.handle_request(_mic_request(), self._collect)
        self.assertEqual(state, ArbiterState.DELEGATED_TO_CONSENT)
        self.assertEqual(service.stats()["pending"], 1)
        parked[0].run([], ResultCode.PERMISSION_DENIED)
        self.assertEqual(service.stats()["pending"], 0)
        self.assertEqual(self.results, [([], ResultCode.PERMISSION_DENIED)])

    def test_handler_requires_handler_consent_type(self):
        with self.assertRaises(ValueError):
            build_service_from_loaded_config(
                _make_cfg("decline"), handler=lambda request, callback: None
            )

    def test_screen_capture_without_frame(self):
        service = build_service_from_loaded_config(_make_cfg(), frames=FrameRegistry())
        req = CaptureRequest(video_type=T.GUM_DESKTOP_VIDEO_CAPTURE)
        service.handle_request(req, self._collect)
        devices, result = self.results[0]
        self.assertEqual(result, ResultCode.OK)
        self.assertEqual(devices[0].id, "screen:-1:0")


class TestCaptureRequestFromMapping(unittest.TestCase):
    def test_names_are_parsed(self):
        req = CaptureRequest.from_mapping(
            {
                "render_process_id": "4",
                "audio_type": "gum-desktop-audio-capture",
                "request_type": "DEVICE_ACCESS",
            }
        )
        self.assertEqual(req.render_process_id, 4)
        self.assertEqual(req.audio_type, T.GUM_DESKTOP_AUDIO_CAPTURE)
        self.assertEqual(req.video_type, T.NO_SERVICE)
        self.assertEqual(req.request_type, RequestType.DEVICE_ACCESS)
        self.assertTrue(req.is_screen_capture)

    def test_unknown_name_raises(self):
        with self.assertRaises(ValueError):
            CaptureRequest.from_mapping({"video_type": "hologram"})


if __name__ == "__main__":
    unittest.main()
