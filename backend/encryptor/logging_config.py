# encryptor/logging_config.py
import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_HANDLER_NAME = "encryptor-console"

def setup_logging(level=logging.INFO, stream=None):
    """Configure root logger for the encryptor service.

    Logs go to stdout by default; the CLI passes stderr so its results stay
    alone on stdout. Safe to call more than once, the handler is installed a
    single time and re-pointed at ``stream``.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    stream = stream if stream is not None else sys.stdout

    root = logging.getLogger()
    root.setLevel(level)
    handler = next((h for h in root.handlers if h.get_name() == _HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler(stream)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        root.addHandler(handler)
    else:
        handler.setStream(stream)

    # silence noisy libraries
    logging.getLogger("cryptography").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
