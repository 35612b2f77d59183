# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Extraction plugins.

Components:
- BasePlugin: plugin contract consumed by the PluginManager
- BaseExtractor: discover/filter/process/aggregate pipeline
- ComponentExtractor, HookExtractor, PageExtractor, I18nExtractor: built-in extractors
- registry: create and register the built-ins by name
"""
