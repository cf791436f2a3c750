"""Template search command line.

Resolves and validates the ``search`` and legacy ``--search`` invocations
and hands the resolved arguments to a search coordinator.
"""

__version__ = "0.1.0"
