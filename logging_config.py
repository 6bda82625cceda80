# Simple logging setup used by the progression engine
import logging
from logging.handlers import RotatingFileHandler
import os
import config

LOG_FILENAME = 'progression.log'
FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


def setup_logging():
    os.makedirs(config.LOG_DIR, exist_ok=True)
    log_path = os.path.join(config.LOG_DIR, LOG_FILENAME)
    root = logging.getLogger()
    level = logging.getLevelName(config.LOG_LEVEL)
    root.setLevel(level if isinstance(level, int) else logging.INFO)

    # nicht doppelt registrieren, wenn setup_logging mehrfach aufgerufen wird
    for h in root.handlers:
        if getattr(h, '_clan_progression', False):
            return root

    formatter = logging.Formatter(FORMAT)
    handler = RotatingFileHandler(log_path, maxBytes=config.LOG_MAX_BYTES,
                                  backupCount=config.LOG_BACKUPS, encoding='utf-8')
    handler.setFormatter(formatter)
    handler._clan_progression = True
    root.addHandler(handler)
    # also have console output
    console = logging.StreamHandler()
    console.setFormatter(formatter)
    console._clan_progression = True
    root.addHandler(console)
    return root
