"""
OpenEdge database creation.

This package creates Progress OpenEdge databases by running the utilities of
a DLC install: prostrct create, procopy, proutil word-rules, then schema and
schema holder loading.
"""

__version__ = "1.0.0"
