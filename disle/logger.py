"""
Logging setup
"""

from datetime import datetime
import logging
from pathlib import Path

from disle.config import Config


class DisleLogger:

    def __init__(self, name: str, config: Config):
        self.logfile = None
        self.logger = logging.getLogger("disle")

        if config.get_specific_option(name, "log_dir"):
            logdir = Path(str(config.get_specific_option(name, "log_dir"))).expanduser()
            logdir.mkdir(parents=True, exist_ok=True)
            self.logfile = logdir.joinpath(datetime.now().strftime(str(config.get_specific_option(name, "log_file"))))

            handler = logging.FileHandler(self.logfile, mode="a", encoding="UTF-8")
            handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
            self.logger.addHandler(handler)

        self.logger.setLevel(str(config.get_specific_option(name, "log_level")).upper())

    def info(self, msg, *args):
        self.logger.info(msg, *args)

    def warn(self, msg, *args):
        self.logger.warning(msg, *args)

    def error(self, msg, *args):
        self.logger.error(msg, *args)
