# ==============================================================================
# THINKLOCK PACKAGE INITIALIZATION
# ==============================================================================
# Course Marketplace Backend with FastAPI and MongoDB
# Roles: admin, instructor, student
# ==============================================================================

"""
ThinkLock API
=============

Backend for an online course marketplace.

Features:
---------
- Accounts with admin / instructor / student roles
- Course listings with an approval workflow
- Enrollment baskets, payment-backed orders and enrollment finalization
- JWT authentication with stackable role and ownership guards
- ImageKit uploads and Stripe payment intents

Usage:
------
    from thinklock.main import app

    # Run with uvicorn
    uvicorn thinklock.main:app --reload
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
