# -- coding: utf-8 --

import argparse
import logging
import time

from core.config import ConfigError, load_config, validate_config
from core.contracts import CaptureRequest, MediaStreamType, RequestType, ResultCode
from core.frames import FrameRegistry
from core.runtime import build_service_from_loaded_config


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        description="Media capture access arbiter (config-driven)",
    )
    p.add_argument(
        "--config-dir", default="config", help="Directory containing main_*.yaml"
    )
    p.add_argument(
        "--audio",
        default=MediaStreamType.NO_SERVICE.value,
        choices=[t.value for t in MediaStreamType],
        help="Requested audio capture type",
    )
    p.add_argument(
        "--video",
        default=MediaStreamType.NO_SERVICE.value,
        choices=[t.value for t in MediaStreamType],
        help="Requested video capture type",
    )
    p.add_argument(
        "--request-type",
        default=RequestType.GENERATE_STREAM.value,
        choices=[t.value for t in RequestType],
    )
    p.add_argument("--audio-device-id", default="")
    p.add_argument("--video-device-id", default="")
    p.add_argument("--origin", default="", help="Security origin of the request")
    p.add_argument("--process-id", type=int, default=1)
    p.add_argument("--frame-id", type=int, default=1)
    p.add_argument(
        "--no-frame",
        action="store_true",
        help="Do not register the requesting frame (simulates a closed frame)",
    )
    p.add_argument("--verbose", action="store_true", help="Debug log")
    p.add_argument(
        "--log-level", default="", help="Override log level (debug/info/warning/error)"
    )
    return p.parse_args(argv)


_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def setup_logging(verbose: bool, log_level: str = "") -> int:
    """Configure root logging (UTC timestamps) and return the chosen level."""
    level = (
        logging.DEBUG
        if verbose
        else _LOG_LEVELS.get(str(log_level or "").strip().lower(), logging.INFO)
    )
    logging.Formatter.converter = time.gmtime
    logging.basicConfig(
        level=level,
        format="%(asctime)sZ %(name)s [%(levelname)s] %(message)s",
        force=True,
    )
    return level


def build_request(args) -> CaptureRequest:
    return CaptureRequest(
        render_process_id=args.process_id,
        render_frame_id=args.frame_id,
        audio_type=MediaStreamType(args.audio),
        video_type=MediaStreamType(args.video),
        request_type=RequestType(args.request_type),
        requested_audio_device_id=args.audio_device_id,
        requested_video_device_id=args.video_device_id,
        security_origin=args.origin,
    )


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose, args.log_level)
    try:
        cfg = load_config(args.config_dir)
        validate_config(cfg)
    except ConfigError as e:
        logging.error("Config invalid: %s", e)
        raise SystemExit(1) from e
    if not args.verbose and not args.log_level:
        setup_logging(args.verbose, cfg.runtime.log_level)
    logging.info("Config file: main=%s", cfg.paths.get("main"))

    frames = FrameRegistry()
    if not args.no_frame:
        frames.register_frame(args.process_id, args.frame_id, url=args.origin)
    try:
        service = build_service_from_loaded_config(cfg, frames=frames)
    except ValueError as e:
        logging.error("Config invalid: %s", e)
        raise SystemExit(1) from e

    outcome = {}

    def on_resolved(devices, result):
        outcome["devices"] = devices
        outcome["result"] = result

    state = service.handle_request(build_request(args), on_resolved)
    logging.info("Arbiter finished in state %s", state.value)
    if "result" not in outcome:
        print("PENDING")
        return 2
    for device in outcome["devices"]:
        print(f"{device.type.value}\t{device.id}\t{device.name}")
    print(outcome["result"].value)
    return 0 if outcome["result"] is ResultCode.OK else 1


if __name__ == "__main__":
    raise SystemExit(main())
