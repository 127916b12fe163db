"""Identity domain - the auth subsystem's account record.

Identities are created by sign-up and owned by the hosted auth service.
The client only reads them and routes password/email updates through.
"""

from nexar.domain.identity.exceptions import AdminRequiredError, NotAuthenticatedError
from nexar.domain.identity.identity import Identity

__all__ = [
    "AdminRequiredError",
    "Identity",
    "NotAuthenticatedError",
]
