"""
Domain models — pydantic types for wink.

All models are re-exported here for convenient access:

    from wink.core.models import Invocable, Category, CategoryList, InvocationResult
"""

from wink.core.models.category import Category, CategoryList
from wink.core.models.invocable import KIND_FACTORIES, Invocable, LaunchMode
from wink.core.models.invocation import InvocationResult

__all__ = [
    # category.py
    "Category",
    "CategoryList",
    # invocable.py
    "Invocable",
    "InvocationResult",
    "KIND_FACTORIES",
    "LaunchMode",
]
