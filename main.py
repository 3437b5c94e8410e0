# main.py
import sys, os
sys.path.append(os.path.dirname(__file__))  # 確保能找到 config.py

from utils.crashlog import setup_crashlog, log_exception, log_dir
setup_crashlog()

import argparse
from config import AppConfig, AudioConfig, TimelineConfig, TransportConfig
import logging, traceback

def _init_logging(level: int = logging.INFO):
    logs = log_dir()
    log_path = os.path.join(logs, "app.log")

    if logging.getLogger().handlers:
        return

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        encoding="utf-8"
    )
    try:
        from logging.handlers import RotatingFileHandler
        fh = RotatingFileHandler(log_path, maxBytes=2*1024*1024, backupCount=3, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
        logging.getLogger().addHandler(fh)
    except OSError:
        logging.warning("file logging disabled: cannot open %s", log_path)

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Classical guitar sight-reading trainer")
    ap.add_argument('--tempo', type=int, default=100, help="initial tempo (60-180 bpm)")
    ap.add_argument('--speed_mode', default='ratio', choices=['ratio', 'linear'])
    ap.add_argument('--active_mode', default='tempo', choices=['tempo', 'fixed'])
    ap.add_argument('--autoplay_on_new', action='store_true', help="NEW PATTERN also starts playback")
    ap.add_argument('--tolerance', type=float, default=2.0, help="trigger window half-width (px)")
    ap.add_argument('--audio', default=None, choices=['samples', 'midi'],
                    help="audio back end (default: samples when --samples_dir is given, else midi)")
    ap.add_argument('--samples_dir', default=None)
    ap.add_argument('--seed', type=int, default=None)
    ap.add_argument('--debug', action='store_true')
    return ap

def config_from_args(args: argparse.Namespace) -> AppConfig:
    return AppConfig(
        timeline=TimelineConfig(trigger_tolerance=args.tolerance),
        transport=TransportConfig(
            tempo=args.tempo,
            speed_mode=args.speed_mode,
            active_mode=args.active_mode,
            regenerate_autoplay=args.autoplay_on_new,
        ),
        audio=AudioConfig(backend=args.audio or ('samples' if args.samples_dir else 'midi'),
                          samples_dir=args.samples_dir),
        seed=args.seed,
    )

def main(argv=None):
    args = build_parser().parse_args(argv)
    _init_logging(logging.DEBUG if args.debug else logging.INFO)
    logging.info("Application start")

    from app import App
    from session import Session
    cfg = config_from_args(args)
    App(cfg, Session(cfg)).run()

if __name__ == '__main__':
    try:
        main()
    except Exception as e:
        try:
            log_exception("Top-level exception", e)
        except OSError:
            pass
        logging.error("未捕捉的例外：%s", e, exc_info=True)
        print("程式發生錯誤，請到 logs/ 資料夾看 app.log 與 error-*.txt")
        traceback.print_exc()
        sys.exit(1)
