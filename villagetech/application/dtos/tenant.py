"""DTOs for tenant provisioning use cases (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime

from villagetech.domain.enums import CommunityType, GateType, PropertyType

DEFAULT_TIMEZONE = "UTC"
DEFAULT_LANGUAGE = "en"
DEFAULT_MAX_ADMIN_USERS = 10
DEFAULT_MAX_SECURITY_USERS = 20
DEFAULT_STORAGE_QUOTA_GB = 10
DEFAULT_ADMIN_POSITION = "Admin Head"


@dataclass(frozen=True)
class PropertySpec:
    """One property to import for a new tenant (already structured; no CSV)."""

    address: str
    property_type: PropertyType
    phase: str | None = None
    block: str | None = None
    lot: str | None = None
    unit: str | None = None
    property_size_sqm: float | None = None
    lot_size_sqm: float | None = None
    bedrooms: int | None = None
    bathrooms: int | None = None
    parking_slots: int | None = None


@dataclass(frozen=True)
class GateSpec:
    """One access gate to configure for a new tenant.

    Operating hours are HH:MM strings; both or neither should be set.
    """

    name: str
    gate_type: GateType
    operating_hours_start: str | None = None
    operating_hours_end: str | None = None
    gps_lat: float | None = None
    gps_lng: float | None = None
    rfid_reader_serial: str | None = None


@dataclass(frozen=True)
class AdminSpec:
    """Profile of the tenant's first administrator (Admin Head)."""

    email: str
    first_name: str
    last_name: str
    phone: str | None = None
    position: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class TenantSpec:
    """Tenant attributes as supplied by the caller; registrar applies defaults."""

    name: str
    subdomain: str
    community_type: CommunityType
    max_residences: int
    legal_name: str | None = None
    year_established: int | None = None
    timezone: str | None = None
    language: str | None = None
    max_admin_users: int | None = None
    max_security_users: int | None = None
    storage_quota_gb: int | None = None


@dataclass(frozen=True)
class TenantProvisioningRequest:
    """Single provisioning call: tenant, its resources, and its admin head."""

    tenant: TenantSpec
    admin: AdminSpec
    properties: tuple[PropertySpec, ...] = field(default_factory=tuple)
    gates: tuple[GateSpec, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class TenantResult:
    """Tenant read-model (result of create_tenant, get_by_id, get_by_subdomain)."""

    id: str
    name: str
    legal_name: str
    subdomain: str
    community_type: CommunityType
    timezone: str
    language: str
    total_residences: int
    max_residences: int
    max_admin_users: int
    max_security_users: int
    storage_quota_gb: int
    created_at: datetime | None = None
