from .cache import CacheStorePort
from .source import DataSourcePort

__all__ = [
    "CacheStorePort",
    "DataSourcePort",
]
