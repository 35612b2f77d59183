# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Built-in plugin catalogue.

Creates the bundled extractors by name and registers them with a manager,
applying the settings of a loaded Config (per-plugin sections plus the
global extractor settings).
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from nextscope.config import Config
from nextscope.errors import NotFoundError
from nextscope.manager import PluginManager
from nextscope.models import PluginConfig
from nextscope.plugins.component_extractor import ComponentExtractor
from nextscope.plugins.extractor import BaseExtractor
from nextscope.plugins.hook_extractor import HookExtractor
from nextscope.plugins.i18n_extractor import I18nExtractor
from nextscope.plugins.page_extractor import PageExtractor

logger = logging.getLogger(__name__)

_FACTORIES: Dict[str, Callable[..., BaseExtractor]] = {
    "component-extractor": ComponentExtractor,
    "hook-extractor": HookExtractor,
    "page-extractor": PageExtractor,
    "i18n-extractor": I18nExtractor,
}


def get_available_plugins() -> List[Dict[str, Any]]:
    """Metadata of every built-in plugin, in catalogue order."""
    return [factory().metadata.to_dict() for factory in _FACTORIES.values()]


def create_plugin(
    name: str, config: Optional[PluginConfig] = None, settings: Optional[Config] = None
) -> BaseExtractor:
    """Instantiate a built-in plugin.

    Args:
        name: Plugin name ("component-extractor", ...).
        config: Scheduling settings. Defaults to PluginConfig().
        settings: Loaded configuration. When given, its section for this
            plugin is applied on top of config and its extractor settings
            replace the plugin defaults.

    Raises:
        NotFoundError: If no built-in plugin has that name.
    """
    factory = _FACTORIES.get(name)
    if factory is None:
        raise NotFoundError(name)

    plugin_config = config if config is not None else PluginConfig()
    if settings is None:
        return factory(plugin_config)

    plugin_config = settings.apply_to_plugin(name, plugin_config)
    if name == "i18n-extractor":
        options = dict(plugin_config.options)
        options.setdefault("translation_functions", settings.translation_functions)
        options.setdefault("min_string_length", settings.min_string_length)
        plugin_config.options = options

    plugin = factory(plugin_config)
    extractor_config = plugin.extractor_config
    extractor_config.max_file_size = settings.max_file_size_kb * 1024
    extractor_config.batch_size = settings.batch_size
    extractor_config.parallel = settings.parallel
    extractor_config.include_node_modules = settings.include_node_modules
    extractor_config.exclude_patterns = extractor_config.exclude_patterns + [
        p for p in settings.exclude_patterns if p not in extractor_config.exclude_patterns
    ]
    return plugin


def register_all_plugins(
    manager: PluginManager, settings: Optional[Config] = None
) -> List[str]:
    """Create and register every built-in plugin.

    Returns:
        The manager's execution order after registration.
    """
    for name in _FACTORIES:
        manager.register(create_plugin(name, settings=settings))
    logger.info(f"Registered {len(_FACTORIES)} built-in plugins")
    return manager.execution_order
