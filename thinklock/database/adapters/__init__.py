# ==============================================================================
# DATABASE ADAPTERS PACKAGE
# ==============================================================================

from thinklock.database.adapters.mongodb_adapter import MongoDBAdapter

__all__ = ["MongoDBAdapter"]
