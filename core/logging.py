import json, sys, time

# stdout carries the probe protocol, so records default to stderr.
LEVELS = {"DEBUG": 10, "INFO": 20, "WARN": 30, "ERROR": 40}

_threshold = LEVELS["INFO"]
_stream = None


def configure(level: str = "INFO", stream=None):
    global _threshold, _stream
    name = level.strip().upper()
    if name == "WARNING":
        name = "WARN"
    if name not in LEVELS:
        raise ValueError(f"Unknown log level: {level!r}")
    _threshold = LEVELS[name]
    _stream = stream


def log(level: str, msg: str, **kwargs):
    if LEVELS[level] < _threshold:
        return
    record = {"ts": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
              "level": level, "msg": msg, **kwargs}
    out = _stream if _stream is not None else sys.stderr
    out.write(json.dumps(record, default=str) + "\n")
    out.flush()

debug = lambda m, **k: log("DEBUG", m, **k)
info = lambda m, **k: log("INFO", m, **k)
warn = lambda m, **k: log("WARN", m, **k)
err  = lambda m, **k: log("ERROR", m, **k)
