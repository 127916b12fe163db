"""httpx adapters for the hosted service's auth, row and blob APIs."""

from nexar.infrastructure.remote.auth_adapter import RemoteAuthAdapter
from nexar.infrastructure.remote.blob_store_adapter import RemoteBlobStoreAdapter
from nexar.infrastructure.remote.http import RemoteHttpClient, error_from_response
from nexar.infrastructure.remote.row_store_adapter import RemoteRowStoreAdapter

__all__ = [
    "RemoteAuthAdapter",
    "RemoteBlobStoreAdapter",
    "RemoteHttpClient",
    "RemoteRowStoreAdapter",
    "error_from_response",
]
