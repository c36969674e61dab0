# main.py
import os
import sys
import argparse
import logging
from logging.handlers import RotatingFileHandler

from utils.crashlog import setup_crashlog, log_exception, log_dir
from config import AppConfig, PlaybackConfig, KeyboardConfig, AudioConfig, PlayMode, MIN_SPEED, MAX_SPEED, clamp_speed
from input.keyboard_range import KEY_RANGES

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

def _init_logging():
    if logging.getLogger().handlers:
        return

    logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT, encoding="utf-8")
    log_path = os.path.join(log_dir(), "app.log")
    try:
        fh = RotatingFileHandler(log_path, maxBytes=2*1024*1024, backupCount=3, encoding="utf-8")
    except OSError as e:
        logging.warning("file logging disabled: %s", e)
        return
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.getLogger().addHandler(fh)

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Play a MIDI file and practice along on a keyboard")
    ap.add_argument('midi', nargs='?', help='MIDI file to load')
    ap.add_argument('--speed', type=float, default=1.0, help=f"playback speed multiplier ({MIN_SPEED}-{MAX_SPEED})")
    ap.add_argument('--lead-in', type=float, default=3.0, help='seconds before the first note')
    ap.add_argument('--mode', default=PlayMode.LEARN.value, choices=[m.value for m in PlayMode])
    ap.add_argument('--key-range', default='88', choices=sorted(KEY_RANGES))
    ap.add_argument('--keymap', default=None, help='keymap JSON (key name -> MIDI note)')
    ap.add_argument('--device', type=int, default=None, help='pygame.midi output device id')
    return ap

def config_from_args(args) -> AppConfig:
    speed = clamp_speed(args.speed)
    if not MIN_SPEED <= args.speed <= MAX_SPEED:
        logging.warning("--speed %s out of range, using %s", args.speed, speed)
    return AppConfig(
        playback=PlaybackConfig(
            lead_in=args.lead_in,
            speed_multiplier=speed,
            mode=PlayMode(args.mode),
        ),
        keyboard=KeyboardConfig(key_range=args.key_range, keymap_path=args.keymap),
        audio=AudioConfig(device_id=args.device),
    )

def main(argv=None):
    _init_logging()
    setup_crashlog()
    logging.info("應用程式啟動")

    args = build_parser().parse_args(argv)
    cfg = config_from_args(args)

    from app import App  # pygame 視窗延後到設定完成後才建立
    app = App(cfg)
    if args.midi and not app.load(args.midi):
        app.close()
        return 1
    app.run()
    return 0

if __name__ == '__main__':
    try:
        sys.exit(main())
    except Exception as e:
        log_exception("Top-level exception", e)
        print("程式發生錯誤，請到 logs/ 資料夾看 app.log 與 error-*.txt")
        sys.exit(1)
