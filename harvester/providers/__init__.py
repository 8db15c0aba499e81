"""Concrete adapters for the interfaces in :mod:`harvester.interfaces`.

Grouped by concern: ``page`` (sources), ``archive``, ``parser``,
``reachability`` and ``progress``.
"""
