"""Public interface for blogindex repositories."""

from .index_repository import IndexRepository
from .post_repository import PostRepository
from .types import IndexRepositoryConfig, PostRepositoryConfig

__all__ = [
    "IndexRepository",
    "IndexRepositoryConfig",
    "PostRepository",
    "PostRepositoryConfig",
]
