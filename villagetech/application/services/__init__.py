"""Application services: subdomain validation, resource import, admin provisioning,
activation notification, and the tenant provisioning orchestrator."""

from villagetech.application.services.activation_notifier import ActivationNotifier
from villagetech.application.services.admin_provisioning_service import (
    AdminProvisioningService,
    generate_one_time_password,
)
from villagetech.application.services.resource_import_service import (
    GateConfigurationService,
    PropertyImportService,
)
from villagetech.application.services.subdomain_validator import (
    RESERVED_SUBDOMAINS,
    SubdomainCheck,
    SubdomainValidator,
    validate_format,
)
from villagetech.application.services.tenant_provisioning_service import (
    FailureAction,
    ProvisioningStep,
    TenantProvisioningService,
    failure_action,
)

__all__ = [
    "ActivationNotifier",
    "AdminProvisioningService",
    "FailureAction",
    "GateConfigurationService",
    "PropertyImportService",
    "ProvisioningStep",
    "RESERVED_SUBDOMAINS",
    "SubdomainCheck",
    "SubdomainValidator",
    "TenantProvisioningService",
    "failure_action",
    "generate_one_time_password",
    "validate_format",
]
