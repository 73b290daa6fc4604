"""Tenant provisioning: validate, register tenant, import resources, create admin, notify.

The workflow spans three independently failing collaborators (relational
store, identity service, email transport) and is not atomic. Each step
reports a StepOutcome; what happens on a failed step is decided by
_FAILURE_POLICY:

- ABORT: nothing has been written yet; raise a clean error.
- CONTINUE: degraded success; record the reason and keep going.
- ORPHAN: the tenant is already committed; raise OrphanedTenantException
  so the operator re-attempts only admin creation for that tenant.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from enum import Enum

from villagetech.application.dtos.provisioning import (
    AdminIdentity,
    AdminReprovisionResult,
    CallerCredential,
    ProvisioningResult,
    StepOutcome,
)
from villagetech.application.dtos.tenant import (
    AdminSpec,
    TenantProvisioningRequest,
    TenantResult,
)
from villagetech.application.interfaces.repositories import (
    ITenantRepository,
    IUserProfileRepository,
)
from villagetech.application.services.activation_notifier import ActivationNotifier
from villagetech.application.services.admin_provisioning_service import (
    AdminProvisioningService,
)
from villagetech.application.services.resource_import_service import (
    GateConfigurationService,
    PropertyImportService,
)
from villagetech.application.services.subdomain_validator import (
    SubdomainCheck,
    SubdomainValidator,
)
from villagetech.domain.enums import ProvisioningStage, UserRole
from villagetech.domain.exceptions import (
    AdminAlreadyExistsException,
    AuthorizationException,
    IdentityProvisioningException,
    OrphanedTenantException,
    SubdomainTakenException,
    TenantNotFoundException,
    TenantRegistrationException,
    ValidationException,
)

logger = logging.getLogger(__name__)


class ProvisioningStep(str, Enum):
    """Workflow steps that report a StepOutcome."""

    REGISTER_TENANT = "register_tenant"
    IMPORT_PROPERTIES = "import_properties"
    CONFIGURE_GATES = "configure_gates"
    PROVISION_ADMIN = "provision_admin"
    NOTIFY_ADMIN = "notify_admin"


class FailureAction(str, Enum):
    """What the orchestrator does when a step does not return Ok."""

    ABORT = "abort"
    CONTINUE = "continue"
    ORPHAN = "orphan"


_FAILURE_POLICY: dict[ProvisioningStep, FailureAction] = {
    ProvisioningStep.REGISTER_TENANT: FailureAction.ABORT,
    ProvisioningStep.IMPORT_PROPERTIES: FailureAction.CONTINUE,
    ProvisioningStep.CONFIGURE_GATES: FailureAction.CONTINUE,
    ProvisioningStep.PROVISION_ADMIN: FailureAction.ORPHAN,
    ProvisioningStep.NOTIFY_ADMIN: FailureAction.CONTINUE,
}


def failure_action(step: ProvisioningStep) -> FailureAction:
    """Return the configured action for a failed step."""
    return _FAILURE_POLICY[step]


def _log_stage(stage: ProvisioningStage, tenant_id: str, **fields: object) -> None:
    extra = " ".join(f"{k}={v}" for k, v in fields.items())
    logger.info("Tenant %s stage=%s %s", tenant_id, stage.value, extra)


def _require_superadmin(caller: CallerCredential) -> None:
    if not caller.is_superadmin:
        logger.warning(
            "Caller %s (role=%s) denied tenant provisioning",
            caller.user_id,
            caller.role.value if caller.role else None,
        )
        raise AuthorizationException(required_role=UserRole.SUPERADMIN.value)


def _raise_for_subdomain(check: SubdomainCheck) -> None:
    """Map a failed subdomain check to the matching exception."""
    if check.valid:
        return
    if check.taken and check.subdomain:
        raise SubdomainTakenException(check.subdomain)
    if check.store_error:
        raise TenantRegistrationException(check.subdomain or "", check.error or "")
    raise ValidationException(check.error or "Invalid subdomain", field="subdomain")


class TenantProvisioningService:
    """Orchestrates one provisioning attempt for a new tenant."""

    def __init__(
        self,
        tenant_repo: ITenantRepository,
        profile_repo: IUserProfileRepository,
        validator: SubdomainValidator,
        property_importer: PropertyImportService,
        gate_configurator: GateConfigurationService,
        admin_provisioner: AdminProvisioningService,
        notifier: ActivationNotifier,
    ) -> None:
        self.tenant_repo = tenant_repo
        self.profile_repo = profile_repo
        self.validator = validator
        self.property_importer = property_importer
        self.gate_configurator = gate_configurator
        self.admin_provisioner = admin_provisioner
        self.notifier = notifier

    async def check_subdomain(self, raw: str, caller: CallerCredential) -> SubdomainCheck:
        """Advisory availability check for the console's creation form."""
        _require_superadmin(caller)
        return await self.validator.validate(raw)

    async def provision(
        self, request: TenantProvisioningRequest, caller: CallerCredential
    ) -> ProvisioningResult:
        """Run the full workflow for one request.

        Raises:
            AuthorizationException: caller is not a superadmin (nothing written).
            ValidationException / SubdomainTakenException: bad or taken subdomain
                (nothing written).
            TenantRegistrationException: tenant row could not be written.
            OrphanedTenantException: tenant exists but the admin could not be created.
        """
        _require_superadmin(caller)

        check = await self.validator.validate(request.tenant.subdomain)
        _raise_for_subdomain(check)
        assert check.subdomain is not None
        subdomain = check.subdomain
        logger.info(
            "Provisioning tenant %r (%s) for caller %s, stage=%s",
            request.tenant.name,
            subdomain,
            caller.user_id,
            ProvisioningStage.VALIDATING.value,
        )

        registered = await self._register_tenant(request, subdomain)
        if not registered.is_ok:
            self._on_failure(ProvisioningStep.REGISTER_TENANT, registered, subdomain=subdomain)
        tenant = registered.value
        assert tenant is not None
        _log_stage(ProvisioningStage.TENANT_CREATED, tenant.id, subdomain=tenant.subdomain)

        warnings: list[str] = []
        properties, gates = await asyncio.gather(
            self.property_importer.import_properties(tenant.id, request.properties),
            self.gate_configurator.configure_gates(tenant.id, request.gates),
        )
        for step, outcome in (
            (ProvisioningStep.IMPORT_PROPERTIES, properties),
            (ProvisioningStep.CONFIGURE_GATES, gates),
        ):
            if not outcome.is_ok:
                self._on_failure(step, outcome, tenant=tenant, warnings=warnings)
        properties_created = properties.value or 0
        gates_created = gates.value or 0
        _log_stage(
            ProvisioningStage.RESOURCES_POPULATED,
            tenant.id,
            properties=properties_created,
            gates=gates_created,
        )

        admin = await self.admin_provisioner.provision_admin(tenant.id, request.admin)
        if not admin.is_ok:
            self._on_failure(
                ProvisioningStep.PROVISION_ADMIN,
                admin,
                tenant=tenant,
                properties_created=properties_created,
                gates_created=gates_created,
            )
        identity = admin.value
        assert identity is not None
        _log_stage(ProvisioningStage.ADMIN_PROVISIONED, tenant.id, admin_user_id=identity.user_id)

        notification_sent = await self._notify(tenant, request.admin, identity, warnings)
        if notification_sent:
            _log_stage(ProvisioningStage.NOTIFIED, tenant.id, admin_email=identity.email)
        _log_stage(
            ProvisioningStage.COMPLETE,
            tenant.id,
            notification_sent=notification_sent,
            warnings=len(warnings),
        )
        return ProvisioningResult(
            success=True,
            tenant_id=tenant.id,
            subdomain=tenant.subdomain,
            admin_user_id=identity.user_id,
            properties_created=properties_created,
            gates_created=gates_created,
            stage=ProvisioningStage.COMPLETE,
            notification_sent=notification_sent,
            warnings=tuple(warnings),
        )

    async def reprovision_admin(
        self, tenant_id: str, admin: AdminSpec, caller: CallerCredential
    ) -> AdminReprovisionResult:
        """Re-attempt only admin creation and activation for an existing tenant.

        Raises:
            TenantNotFoundException: no tenant with tenant_id.
            AdminAlreadyExistsException: tenant already has an admin head.
            IdentityProvisioningException: identity service failed again.
        """
        _require_superadmin(caller)
        tenant = await self.tenant_repo.get_by_id(tenant_id)
        if tenant is None:
            raise TenantNotFoundException(tenant_id)
        existing = await self.profile_repo.get_admin_head_id(tenant_id)
        if existing is not None:
            raise AdminAlreadyExistsException(tenant_id, existing)

        logger.info(
            "Re-provisioning admin head for tenant %s by caller %s", tenant_id, caller.user_id
        )
        outcome = await self.admin_provisioner.provision_admin(tenant_id, admin)
        if not outcome.is_ok:
            # A concurrent remediation may have won the one-admin-head index.
            winner = await self.profile_repo.get_admin_head_id(tenant_id)
            if winner is not None:
                raise AdminAlreadyExistsException(tenant_id, winner)
            raise IdentityProvisioningException(admin.email, outcome.reason or "unknown error")
        identity = outcome.value
        assert identity is not None

        notification_sent = await self._notify(tenant, admin, identity, [])
        return AdminReprovisionResult(
            tenant_id=tenant.id,
            subdomain=tenant.subdomain,
            admin_user_id=identity.user_id,
            notification_sent=notification_sent,
        )

    async def _register_tenant(
        self, request: TenantProvisioningRequest, subdomain: str
    ) -> StepOutcome[TenantResult]:
        """Insert the tenant row. A lost uniqueness race still raises SubdomainTakenException."""
        spec = request.tenant
        if spec.subdomain != subdomain:
            spec = replace(spec, subdomain=subdomain)
        try:
            tenant = await self.tenant_repo.create_tenant(spec, len(request.properties))
        except TenantRegistrationException as e:
            return StepOutcome.hard_fail(str(e.details.get("reason") or e.message))
        return StepOutcome.ok(tenant)

    async def _notify(
        self,
        tenant: TenantResult,
        admin: AdminSpec,
        identity: AdminIdentity,
        warnings: list[str],
    ) -> bool:
        outcome = await self.notifier.notify(tenant, admin, identity)
        if not outcome.is_ok:
            self._on_failure(
                ProvisioningStep.NOTIFY_ADMIN, outcome, tenant=tenant, warnings=warnings
            )
            return False
        return True

    def _on_failure(
        self,
        step: ProvisioningStep,
        outcome: StepOutcome,
        *,
        subdomain: str | None = None,
        tenant: TenantResult | None = None,
        warnings: list[str] | None = None,
        properties_created: int = 0,
        gates_created: int = 0,
    ) -> None:
        """Apply the failure policy for step. Returns only for CONTINUE."""
        reason = outcome.reason or "unknown error"
        action = failure_action(step)
        if action is FailureAction.CONTINUE:
            logger.warning(
                "Step %s degraded for tenant %s: %s",
                step.value,
                tenant.id if tenant else None,
                reason,
            )
            if warnings is not None:
                warnings.append(f"{step.value}: {reason}")
            return
        if action is FailureAction.ABORT:
            logger.error("Step %s failed, aborting (%s): %s", step.value, subdomain, reason)
            raise TenantRegistrationException(subdomain or "", reason)
        assert tenant is not None
        logger.error(
            "Tenant %s (%s) orphaned: admin creation failed: %s",
            tenant.id,
            tenant.subdomain,
            reason,
        )
        raise OrphanedTenantException(
            tenant.id,
            tenant.subdomain,
            reason,
            properties_created=properties_created,
            gates_created=gates_created,
        )
