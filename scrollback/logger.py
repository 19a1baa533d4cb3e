import logging
import sys
from logging.handlers import RotatingFileHandler

from scrollback import config

FORMAT = '%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s'


def setup_logger(name: str = config.LOG_NAME,
                 level: str = config.LOG_LEVEL,
                 log_file: str = config.LOG_FILE,
                 max_bytes: int = config.LOG_MAX_BYTES,
                 backup_count: int = config.LOG_BACKUP_COUNT) -> logging.Logger:
    log = logging.getLogger(name)

    if not log.handlers:
        log.setLevel(getattr(logging, level.upper(), logging.INFO))
        fmt = logging.Formatter(FORMAT)

        sh = logging.StreamHandler(sys.stdout)
        sh.setFormatter(fmt)
        log.addHandler(sh)

        if log_file:
            fh = RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count)
            fh.setFormatter(fmt)
            log.addHandler(fh)

    return log


logger = setup_logger()
