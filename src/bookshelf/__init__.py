"""
Bookshelf GraphQL API
Books and authors over an in-memory collection or an upstream REST service
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
