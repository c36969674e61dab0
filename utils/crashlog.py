# utils/crashlog.py
import os, sys, faulthandler, datetime, traceback, threading, logging

_fault_file = None

def log_dir() -> str:
    d = os.path.join(os.getcwd(), "logs")
    os.makedirs(d, exist_ok=True)
    return d

def _new_log_path(prefix: str = "crash") -> str:
    stamp = datetime.datetime.now().strftime("%Y%m%d-%H%M%S")
    return os.path.join(log_dir(), f"{prefix}-{stamp}.txt")

def _write_report(prefix: str, title: str, exc_type, exc, tb) -> str:
    path = _new_log_path(prefix)
    with open(path, "w", encoding="utf-8") as out:
        out.write(f"{title}\n")
        out.write("=" * 60 + "\n")
        traceback.print_exception(exc_type, exc, tb, file=out)
    return path

def setup_crashlog():
    """native crash -> faulthandler；未捕捉例外（主執行緒與其他執行緒）-> logs/crash-*.txt"""
    global _fault_file
    if _fault_file is None:
        try:
            _fault_file = open(_new_log_path("native"), "w", encoding="utf-8")
            faulthandler.enable(_fault_file, all_threads=True)
        except OSError as e:
            logging.warning("faulthandler disabled: %s", e)
            _fault_file = None

    def _hook(exc_type, exc, tb):
        try:
            _write_report("crash", "UNCAUGHT EXCEPTION", exc_type, exc, tb)
        finally:
            sys.__excepthook__(exc_type, exc, tb)
    sys.excepthook = _hook

    def _thread_hook(args):
        _hook(args.exc_type, args.exc_value, args.exc_traceback)
    threading.excepthook = _thread_hook

def log_exception(title: str, exc: BaseException) -> str:
    logging.error("%s: %s", title, exc, exc_info=exc)
    return _write_report("error", f"[{title}] {type(exc).__name__}: {exc}", type(exc), exc, exc.__traceback__)
