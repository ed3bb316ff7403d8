"""Disle configuration module"""

from pathlib import Path
from typing import Any

from tomlkit import parse, TOMLDocument

DEFAULT_GLOBAL_CONFIG = {
    "command_char": "/",
    "data_directory": "~/.disle",
    "reserved_names": ["ova"],
    "log_file": "disle-%Y%m%d.log",
    "log_level": "INFO",
    "modules": [],
}


class Config:
    """Base configuration class"""
    _config_file: str
    name = "config"

    def __init__(self, **kwargs):
        super().__init__()
        if "config" not in kwargs or kwargs["config"] is None:
            kwargs["config"] = "~/.dislerc"
            p = Path(kwargs["config"]).expanduser()
            if not p.is_file():
                with open(p, "w", encoding="UTF-8"):
                    pass
        self._config_file = kwargs["config"]
        self.reload()

    def reload(self) -> None:
        """Reload configuration file from disk"""
        cfile = Path(self._config_file).expanduser()
        with open(cfile, "r", encoding="UTF-8") as f:
            self._config = parse(f.read())

    def get_specific_option(self, section: str, key: str, default=None) -> Any:
        """Get configuration value for section, global, or default"""

        if section in self.config and key in self.config[section]:
            return self.config[section][key]

        if "global" in self.config and key in self.config["global"]:
            return self.config["global"][key]

        if key in DEFAULT_GLOBAL_CONFIG:
            return DEFAULT_GLOBAL_CONFIG[key]

        return default

    def data_directory(self, section: str = "global") -> Path:
        """Returns the repository of the per-room alias files"""
        path = Path(str(self.get_specific_option(section, "data_directory"))).expanduser()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def config(self) -> TOMLDocument:
        return self._config
