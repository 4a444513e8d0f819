# ==============================================================================
# REPOSITORIES PACKAGE INITIALIZATION
# ==============================================================================

"""
Repository Pattern Implementation
=================================

One repository per collection, all built on BaseRepository:
- AccountRepository: users
- CourseRepository: courses
- BasketRepository: bookedCourses
- OrderRepository: orders
"""

from thinklock.database.repositories.base_repository import BaseRepository, ObjectIdRepository
from thinklock.database.repositories.account_repository import AccountRepository
from thinklock.database.repositories.course_repository import CourseRepository
from thinklock.database.repositories.basket_repository import BasketRepository
from thinklock.database.repositories.order_repository import OrderRepository

__all__ = [
    "BaseRepository",
    "ObjectIdRepository",
    "AccountRepository",
    "CourseRepository",
    "BasketRepository",
    "OrderRepository",
]
