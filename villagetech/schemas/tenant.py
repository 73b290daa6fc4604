"""Tenant provisioning API schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from villagetech.application.dtos.tenant import (
    AdminSpec,
    GateSpec,
    PropertySpec,
    TenantProvisioningRequest,
    TenantSpec,
)
from villagetech.domain.enums import CommunityType, GateType, PropertyType

_HHMM_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class PropertySpecIn(BaseModel):
    """One property descriptor in the provisioning request."""

    address: str = Field(..., min_length=1, max_length=500)
    phase: str | None = None
    block: str | None = None
    lot: str | None = None
    unit: str | None = None
    property_type: PropertyType
    property_size_sqm: float | None = Field(default=None, ge=0)
    lot_size_sqm: float | None = Field(default=None, ge=0)
    bedrooms: int | None = Field(default=None, ge=0)
    bathrooms: int | None = Field(default=None, ge=0)
    parking_slots: int | None = Field(default=None, ge=0)

    def to_spec(self) -> PropertySpec:
        return PropertySpec(**self.model_dump())


class GateSpecIn(BaseModel):
    """One gate descriptor in the provisioning request. Hours are HH:MM (24h)."""

    name: str = Field(..., min_length=1, max_length=255)
    gate_type: GateType
    operating_hours_start: str | None = Field(default=None, pattern=_HHMM_PATTERN)
    operating_hours_end: str | None = Field(default=None, pattern=_HHMM_PATTERN)
    gps_lat: float | None = Field(default=None, ge=-90, le=90)
    gps_lng: float | None = Field(default=None, ge=-180, le=180)
    rfid_reader_serial: str | None = None

    def to_spec(self) -> GateSpec:
        return GateSpec(**self.model_dump())


class AdminHeadIn(BaseModel):
    """Admin Head profile fields, shared by provisioning and re-provisioning."""

    admin_email: EmailStr
    admin_first_name: str = Field(..., min_length=1, max_length=100)
    admin_last_name: str = Field(..., min_length=1, max_length=100)
    admin_phone: str | None = Field(default=None, max_length=50)
    admin_position: str | None = Field(default=None, max_length=100)

    @field_validator("admin_email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower()

    def to_admin_spec(self) -> AdminSpec:
        return AdminSpec(
            email=self.admin_email,
            first_name=self.admin_first_name,
            last_name=self.admin_last_name,
            phone=self.admin_phone,
            position=self.admin_position,
        )


class TenantProvisionRequest(AdminHeadIn):
    """Request body for POST /tenants: tenant, its resources and its Admin Head.

    Subdomain format and availability are checked by the service so the
    caller gets the same messages as the availability endpoint.
    """

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1, max_length=255)
    legal_name: str | None = Field(default=None, max_length=255)
    subdomain: str = Field(..., max_length=255)
    community_type: CommunityType
    year_established: int | None = Field(default=None, ge=1800, le=2100)
    timezone: str | None = Field(default=None, max_length=64)
    language: str | None = Field(default=None, max_length=16)
    max_residences: int = Field(..., ge=1)
    max_admin_users: int | None = Field(default=None, ge=1)
    max_security_users: int | None = Field(default=None, ge=0)
    storage_quota_gb: int | None = Field(default=None, ge=1)
    properties: list[PropertySpecIn] = Field(default_factory=list)
    gates: list[GateSpecIn] = Field(default_factory=list)

    def to_request(self) -> TenantProvisioningRequest:
        return TenantProvisioningRequest(
            tenant=TenantSpec(
                name=self.name,
                subdomain=self.subdomain,
                community_type=self.community_type,
                max_residences=self.max_residences,
                legal_name=self.legal_name,
                year_established=self.year_established,
                timezone=self.timezone,
                language=self.language,
                max_admin_users=self.max_admin_users,
                max_security_users=self.max_security_users,
                storage_quota_gb=self.storage_quota_gb,
            ),
            admin=self.to_admin_spec(),
            properties=tuple(p.to_spec() for p in self.properties),
            gates=tuple(g.to_spec() for g in self.gates),
        )


class TenantProvisionResponse(BaseModel):
    """Response after provisioning (full or degraded success). Never includes the password."""

    success: bool
    tenant_id: str | None = None
    subdomain: str | None = None
    admin_user_id: str | None = None
    properties_created: int = 0
    gates_created: int = 0
    notification_sent: bool = False
    warnings: list[str] = Field(default_factory=list)
    error: str | None = None


class SubdomainAvailabilityResponse(BaseModel):
    """Response for GET /tenants/subdomain-availability."""

    subdomain: str | None
    available: bool
    error: str | None = None


class AdminHeadCreateResponse(BaseModel):
    """Response after re-provisioning an Admin Head for an orphaned tenant."""

    success: bool = True
    tenant_id: str
    subdomain: str
    admin_user_id: str
    notification_sent: bool
