# ==============================================================================
# DATABASE PACKAGE INITIALIZATION
# ==============================================================================
# Document store access layer
# ==============================================================================

"""
Database Module
===============

Key Components:
- Adapters: MongoDB collection primitives
- Factory: Adapter instantiation and lifecycle
- Repositories: One data access class per collection
"""

from thinklock.database.factory import DatabaseFactory
from thinklock.database.adapters.mongodb_adapter import MongoDBAdapter

__all__ = [
    "DatabaseFactory",
    "MongoDBAdapter",
]
