"""
services - Business-logic layer sitting between API/client and DB.
"""

from services.store_service import StoreService               # noqa: F401
from services.query_service import QueryService, SortSpec     # noqa: F401
