from nexar.infrastructure.persistence.remote.listing_repository import (
    ListingRepositoryRemote,
)
from nexar.infrastructure.persistence.remote.message_repository import (
    MessageRepositoryRemote,
)
from nexar.infrastructure.persistence.remote.profile_repository import (
    ProfileRepositoryRemote,
)

__all__ = [
    "ListingRepositoryRemote",
    "MessageRepositoryRemote",
    "ProfileRepositoryRemote",
]
