import inspect
import logging
import importlib
import pkgutil
from dataclasses import dataclass, field
from typing import Dict, List

from serum import Context

from disle.plugins import Plugin

log = logging.getLogger(__name__)


@dataclass
class PluginModule:
    import_path: str
    plugin_names: List[str] = field(default_factory=list)
    exceptions: List[Exception] = field(default_factory=list)


class PluginLoader:
    """Imports command modules and registers their plugins on the director"""

    def __init__(self):
        self.plugins: Dict[str, Plugin] = {}
        self.plugin_modules: Dict[str, PluginModule] = {}

    @staticmethod
    def discover_plugin_modules(package: str) -> List[PluginModule]:
        """Every non-private module below package, a plain module is its own only candidate"""
        try:
            root = importlib.import_module(package)
        except ImportError:
            log.exception(f"Unable to import plugin package {package}")
            return [PluginModule(package, exceptions=[ImportError(f"No plugin package {package}")])]

        if not hasattr(root, "__path__"):
            return [PluginModule(package)]

        return [PluginModule(info.name) for info in pkgutil.walk_packages(root.__path__, prefix=f"{package}.")
                if not info.ispkg and not info.name.rpartition(".")[2].startswith("_")
                and info.name != __name__]

    def instantiate_plugins(self, plugin_module: PluginModule, module, plugin_context: Dict):
        for name, cls in inspect.getmembers(module, inspect.isclass):
            if cls.__module__ != module.__name__ or not issubclass(cls, Plugin):
                continue

            try:
                with Context(**plugin_context):
                    plugin: Plugin = cls()
            except Exception as exc:
                log.exception(f"Error instantiating {module.__name__}.{name}")
                plugin_module.exceptions.append(exc)
                continue

            if plugin.get_name() in self.plugins:
                log.warning(f"Skipping duplicate plugin {plugin.get_name()} from {module.__name__}")
                plugin_module.exceptions.append(Exception(f"Duplicate plugin name {plugin.get_name()}"))
                continue

            log.debug(f"Adding plugin {module.__name__}.{name}")
            plugin.director.register_object(plugin)
            self.plugins[plugin.get_name()] = plugin
            plugin_module.plugin_names.append(plugin.get_name())

    def load_plugin_module(self, plugin_module: PluginModule, plugin_context: Dict):
        self.plugin_modules[plugin_module.import_path] = plugin_module
        if plugin_module.exceptions:
            return

        try:
            module = importlib.import_module(plugin_module.import_path)
        except Exception as exc:
            log.exception(f"Error loading plugin module {plugin_module.import_path}")
            plugin_module.exceptions.append(exc)
            return

        self.instantiate_plugins(plugin_module, module, plugin_context)

    def load_plugins(self, packages: List[str], plugin_context: Dict) -> List[PluginModule]:
        """Load plugins from packages, `config` and `director` are injected from plugin_context"""
        loaded = []

        for package in packages:
            log.info(f"Loading plugins from {package}")

            for plugin_module in self.discover_plugin_modules(package):
                if plugin_module.import_path in self.plugin_modules:
                    continue

                self.load_plugin_module(plugin_module, plugin_context)
                loaded.append(plugin_module)

        return loaded

    def get_failed_modules(self) -> List[PluginModule]:
        return [pm for pm in self.plugin_modules.values() if pm.exceptions]
