"""
LRU Cache - fixed capacity key-value cache with least-recently-used eviction
Copyright 2025 Jurden Bruce
"""

__version__ = "1.0.0"

from .models import Node, CacheStats
from .cache import LRUCache
from .config import load_config

__all__ = [
    'Node',
    'CacheStats',
    'LRUCache',
    'load_config',
]
