from .extractor import PostExtractor
from .renderer import IndexRenderer, IndexStats
from .types import IndexRendererConfig, PostRecord, TagGroup

__all__ = [
    "IndexRenderer",
    "IndexRendererConfig",
    "IndexStats",
    "PostExtractor",
    "PostRecord",
    "TagGroup",
]
