"""delicious-harvester: harvest a paginated bookmark collection.

Pages are walked strictly in ``next``-pointer order, combined into one
:class:`~harvester.models.bookmark.CombinedResult`, and optionally checked
item by item for URL reachability.  Start with
:func:`harvester.main.harvest` or the ``python -m harvester.cli`` tool.
"""

__version__ = "0.1.0"
