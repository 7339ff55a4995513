import unittest

from core.callback import CallbackAlreadyRunError, CallbackGuard, ResolutionCallback
from core.contracts import MediaStreamDevice, MediaStreamType, ResultCode

MIC = MediaStreamDevice(MediaStreamType.DEVICE_AUDIO_CAPTURE, "mic", "Mic")


class TestResolutionCallback(unittest.TestCase):
    def test_second_run_raises(self):
        calls = []
        cb = ResolutionCallback(lambda d, r: calls.append((d, r)), label="req-1")
        cb.run([MIC], ResultCode.OK)
        self.assertTrue(cb.has_run)
        with self.assertRaises(CallbackAlreadyRunError) as cm:
            cb([MIC], ResultCode.OK)
        self.assertIn("req-1", str(cm.exception))
        self.assertEqual(calls, [([MIC], ResultCode.OK)])

    def test_devices_are_copied(self):
        received = []
        devices = [MIC]
        ResolutionCallback(lambda d, r: received.append(d)).run(devices, ResultCode.OK)
        devices.clear()
        self.assertEqual(received, [[MIC]])


class TestCallbackGuard(unittest.TestCase):
    def test_close_fires_shutdown_once(self):
        calls = []
        guard = CallbackGuard(lambda d, r: calls.append((d, r)))
        self.assertTrue(guard.close())
        self.assertFalse(guard.close())
        self.assertEqual(calls, [([], ResultCode.FAILED_DUE_TO_SHUTDOWN)])

    def test_hand_off_releases_ownership(self):
        calls = []
        guard = CallbackGuard(lambda d, r: calls.append(r))
        cb = guard.hand_off()
        self.assertFalse(guard.held)
        self.assertFalse(guard.close())
        cb.run([], ResultCode.PERMISSION_DENIED)
        self.assertEqual(calls, [ResultCode.PERMISSION_DENIED])
        with self.assertRaises(RuntimeError):
            guard.peek()

    def test_fire_then_close(self):
        calls = []
        guard = CallbackGuard(lambda d, r: calls.append(r))
        guard.fire([MIC], ResultCode.OK)
        guard.close()
        self.assertEqual(calls, [ResultCode.OK])


if __name__ == "__main__":
    unittest.main()
