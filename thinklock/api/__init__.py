# ==============================================================================
# API PACKAGE INITIALIZATION
# ==============================================================================

from thinklock.api.router import api_router

__all__ = ["api_router"]
