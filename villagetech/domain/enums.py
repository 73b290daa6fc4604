"""Domain enumerations for the VillageTech platform.

Enums represent fixed sets of domain values (community type, property and
gate kinds, identity roles, provisioning stages).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings (e.g. for CHECK constraints)."""
        return [member.value for member in cls]


class CommunityType(_ValuesMixin, str, Enum):
    """Kind of residential community a tenant represents."""

    HOA = "HOA"
    CONDO = "Condo"
    GATED_VILLAGE = "Gated Village"
    SUBDIVISION = "Subdivision"


class PropertyType(_ValuesMixin, str, Enum):
    """Structural type of a property (residence or lot)."""

    SINGLE_FAMILY = "single_family"
    TOWNHOUSE = "townhouse"
    CONDO = "condo"
    LOT_ONLY = "lot_only"


class PropertyStatus(_ValuesMixin, str, Enum):
    """Occupancy status of a property. New properties start vacant."""

    VACANT = "vacant"
    OCCUPIED = "occupied"
    UNDER_CONSTRUCTION = "under_construction"


class GateType(_ValuesMixin, str, Enum):
    """Access gate role within a community."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    SERVICE = "service"
    EMERGENCY = "emergency"


class GateStatus(_ValuesMixin, str, Enum):
    """Operational status of a gate. New gates start active."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    MAINTENANCE = "maintenance"


class UserRole(_ValuesMixin, str, Enum):
    """Identity roles. superadmin is platform-wide (no tenant)."""

    SUPERADMIN = "superadmin"
    ADMIN_HEAD = "admin_head"
    ADMIN_OFFICER = "admin_officer"


class ProvisioningStage(_ValuesMixin, str, Enum):
    """Stages of one tenant provisioning attempt, in order."""

    VALIDATING = "validating"
    TENANT_CREATED = "tenant_created"
    RESOURCES_POPULATED = "resources_populated"
    ADMIN_PROVISIONED = "admin_provisioned"
    NOTIFIED = "notified"
    COMPLETE = "complete"
