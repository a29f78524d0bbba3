"""A small WSGI web framework with trie-based routing, route groups and a demo app."""

__version__ = "0.1.0"
__all__ = ["context", "trie", "router", "engine", "app"]