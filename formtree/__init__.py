"""Server-rendered component tree with a collection-bound check group."""

__version__ = "0.1.0"
