"""
db - Database layer.

Public API:
    init_db()       → create engine + tables
    get_session()   → new Session
    KVEntry         → ORM model for named JSON blobs
"""

from db.engine import init_db, get_session          # noqa: F401
from db.models import Base, KVEntry                 # noqa: F401
