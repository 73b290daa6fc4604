"""Identity service adapters: local identity store and GoTrue admin API."""

from villagetech.infrastructure.external.identity.factory import build_identity_service
from villagetech.infrastructure.external.identity.gotrue import GoTrueIdentityService
from villagetech.infrastructure.external.identity.local import LocalIdentityService

__all__ = [
    "GoTrueIdentityService",
    "LocalIdentityService",
    "build_identity_service",
]
