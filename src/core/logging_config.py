import logging
import sys
import os
from pathlib import Path

LOG_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s"


def setup_logging(level: str = None, log_file: str | Path = None) -> logging.Logger:
    """Configure the ``todostate`` logger for a front-end process.

    Console output goes to stdout at ``level`` (or ``LOG_LEVEL``). With a
    ``log_file`` (or ``TODO_LOG_FILE``) every record down to DEBUG is also
    written there, so individual store mutations can be traced without
    cluttering the console. Safe to call again once the config is loaded.
    """
    log_level = level or os.environ.get("LOG_LEVEL", "INFO")
    numeric_level = getattr(logging, str(log_level).upper(), logging.INFO)
    log_file = log_file or os.environ.get("TODO_LOG_FILE")

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(numeric_level)
    console.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger("todostate")
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()
    root.addHandler(console)
    root.setLevel(numeric_level)
    root.propagate = False

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(path), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(fh)
        root.setLevel(logging.DEBUG)

    logging.basicConfig(level=logging.WARNING)

    # Quiet noisy libraries
    for name in ("PIL", "dotenv"):
        logging.getLogger(name).setLevel(logging.WARNING)

    return root
