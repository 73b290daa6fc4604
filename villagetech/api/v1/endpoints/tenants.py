"""Tenant provisioning API: thin routes delegating to TenantProvisioningService."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from villagetech.api.v1.dependencies import get_caller, get_tenant_provisioning_service
from villagetech.application.dtos.provisioning import CallerCredential
from villagetech.application.services import TenantProvisioningService
from villagetech.core.limiter import limit_provision_tenant, limit_tenant_reads
from villagetech.schemas.tenant import (
    AdminHeadCreateResponse,
    AdminHeadIn,
    SubdomainAvailabilityResponse,
    TenantProvisionRequest,
    TenantProvisionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=TenantProvisionResponse, status_code=201)
@limit_provision_tenant
async def provision_tenant(
    request: Request,
    body: TenantProvisionRequest,
    caller: Annotated[CallerCredential, Depends(get_caller)],
    service: Annotated[TenantProvisioningService, Depends(get_tenant_provisioning_service)],
) -> TenantProvisionResponse:
    """Create a tenant with its properties, gates and Admin Head (superadmin only).

    201 on full or degraded success (see warnings). A 500 with error_code
    TENANT_ORPHANED means the tenant exists without an admin: call
    POST /tenants/{tenant_id}/admin-head instead of resubmitting.
    """
    result = await service.provision(body.to_request(), caller)
    return TenantProvisionResponse(
        success=result.success,
        tenant_id=result.tenant_id,
        subdomain=result.subdomain,
        admin_user_id=result.admin_user_id,
        properties_created=result.properties_created,
        gates_created=result.gates_created,
        notification_sent=result.notification_sent,
        warnings=list(result.warnings),
        error=result.error,
    )


@router.get("/subdomain-availability", response_model=SubdomainAvailabilityResponse)
@limit_tenant_reads
async def subdomain_availability(
    request: Request,
    caller: Annotated[CallerCredential, Depends(get_caller)],
    service: Annotated[TenantProvisioningService, Depends(get_tenant_provisioning_service)],
    subdomain: Annotated[str, Query(max_length=255)] = "",
) -> SubdomainAvailabilityResponse:
    """Advisory check used while filling in the creation form."""
    check = await service.check_subdomain(subdomain, caller)
    return SubdomainAvailabilityResponse(
        subdomain=check.subdomain, available=check.valid, error=check.error
    )


@router.post(
    "/{tenant_id}/admin-head", response_model=AdminHeadCreateResponse, status_code=201
)
@limit_provision_tenant
async def create_admin_head(
    request: Request,
    tenant_id: str,
    body: AdminHeadIn,
    caller: Annotated[CallerCredential, Depends(get_caller)],
    service: Annotated[TenantProvisioningService, Depends(get_tenant_provisioning_service)],
) -> AdminHeadCreateResponse:
    """Re-attempt Admin Head creation for a tenant left without one (superadmin only)."""
    result = await service.reprovision_admin(tenant_id, body.to_admin_spec(), caller)
    return AdminHeadCreateResponse(
        tenant_id=result.tenant_id,
        subdomain=result.subdomain,
        admin_user_id=result.admin_user_id,
        notification_sent=result.notification_sent,
    )
