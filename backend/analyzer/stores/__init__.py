"""Read-only data access for actions and similarities"""

from .action_store import ActionStore
from .similarity_store import SimilarityStore

__all__ = ["ActionStore", "SimilarityStore"]
