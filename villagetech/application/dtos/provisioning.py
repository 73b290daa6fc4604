"""DTOs for the provisioning workflow: caller credential, step outcomes, results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

from villagetech.domain.enums import ProvisioningStage, UserRole

T = TypeVar("T")


@dataclass(frozen=True)
class CallerCredential:
    """Resolved identity of the caller. Passed explicitly into the orchestrator."""

    user_id: str
    role: UserRole | None

    @property
    def is_superadmin(self) -> bool:
        return self.role == UserRole.SUPERADMIN


class StepStatus(str, Enum):
    """How a single workflow step ended."""

    OK = "ok"
    SOFT_FAIL = "soft_fail"
    HARD_FAIL = "hard_fail"


@dataclass(frozen=True)
class StepOutcome(Generic[T]):
    """Result of one provisioning step: Ok(value) | SoftFail(reason) | HardFail(reason).

    A soft failure may still carry a value (e.g. rows that landed before a
    batch failed).
    """

    status: StepStatus
    value: T | None = None
    reason: str | None = None

    @classmethod
    def ok(cls, value: T) -> "StepOutcome[T]":
        return cls(StepStatus.OK, value)

    @classmethod
    def soft_fail(cls, reason: str, value: T | None = None) -> "StepOutcome[T]":
        return cls(StepStatus.SOFT_FAIL, value, reason)

    @classmethod
    def hard_fail(cls, reason: str) -> "StepOutcome[T]":
        return cls(StepStatus.HARD_FAIL, None, reason)

    @property
    def is_ok(self) -> bool:
        return self.status is StepStatus.OK


@dataclass(frozen=True)
class AdminIdentity:
    """Identity created for an administrator.

    one_time_password is held only in memory until the activation email is
    rendered; it is never persisted or returned to the caller.
    """

    user_id: str
    email: str
    one_time_password: str = field(repr=False)


@dataclass(frozen=True)
class ProvisioningResult:
    """Consolidated, non-persisted result of one provisioning attempt."""

    success: bool
    tenant_id: str | None = None
    subdomain: str | None = None
    admin_user_id: str | None = None
    properties_created: int = 0
    gates_created: int = 0
    error: str | None = None
    stage: ProvisioningStage = ProvisioningStage.COMPLETE
    notification_sent: bool = False
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class AdminReprovisionResult:
    """Result of re-attempting admin head creation for an existing tenant."""

    tenant_id: str
    subdomain: str
    admin_user_id: str
    notification_sent: bool
