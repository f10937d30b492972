"""
client - Python side of the catalog: gateway client, debounced
saves and the in-memory editing session.

Public API:
    PersistenceGateway(base_url, token)
    DebouncedSaver(name, snapshot, save, delay)
    CatalogSession(gateway)
"""

from client.gateway import PersistenceGateway                 # noqa: F401
from client.debounce import DebouncedSaver                    # noqa: F401
from client.session import CatalogSession, sheet_csv_url      # noqa: F401
