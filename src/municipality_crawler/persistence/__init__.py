# ABOUTME: Persistence layer for the crawl results
# ABOUTME: JSON dataset storage with whole-file rewrites

from .store import JsonResultStore

__all__ = [
    "JsonResultStore",
]
