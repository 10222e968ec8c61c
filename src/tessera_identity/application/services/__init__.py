"""Identity application services."""

from tessera_identity.application.services.authentication_service import (
    AuthenticationService,
)
from tessera_identity.application.services.identity_reconciler import (
    IdentityReconciler,
)

__all__ = [
    "AuthenticationService",
    "IdentityReconciler",
]
