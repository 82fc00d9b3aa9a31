"""Locale package for i18n JSON catalogs.

Each ``<locale>.json`` file holds a nested dictionary of translations and
may declare the locale's plural categories under ``i18n.plural.keys``.
The files are read via importlib.resources, so this stays a real package.
"""
