"""Activation email for a newly provisioned Admin Head (best effort)."""

from __future__ import annotations

import logging

from villagetech.application.dtos.notification import ActivationEmailContext, EmailMessage
from villagetech.application.dtos.provisioning import AdminIdentity, StepOutcome
from villagetech.application.dtos.tenant import AdminSpec, TenantResult
from villagetech.application.interfaces.services import (
    IActivationEmailRenderer,
    IEmailTransport,
)
from villagetech.domain.exceptions import VillageTechException

logger = logging.getLogger(__name__)

DEFAULT_PORTAL_URL_TEMPLATE = "https://{subdomain}.admin.villagetech.app"


class ActivationNotifier:
    """Renders and sends the activation email; any delivery failure is a soft failure."""

    def __init__(
        self,
        renderer: IActivationEmailRenderer,
        transport: IEmailTransport,
        portal_url_template: str = DEFAULT_PORTAL_URL_TEMPLATE,
    ) -> None:
        self.renderer = renderer
        self.transport = transport
        self.portal_url_template = portal_url_template

    def portal_url(self, subdomain: str) -> str:
        return self.portal_url_template.format(subdomain=subdomain)

    async def notify(
        self, tenant: TenantResult, admin: AdminSpec, identity: AdminIdentity
    ) -> StepOutcome[str | None]:
        """Send the credentials to the admin. Ok(message_id) or SoftFail(reason)."""
        context = ActivationEmailContext(
            admin_name=admin.full_name,
            admin_email=identity.email,
            tenant_name=tenant.name,
            subdomain=tenant.subdomain,
            portal_url=self.portal_url(tenant.subdomain),
            one_time_password=identity.one_time_password,
        )
        try:
            rendered = self.renderer.render(context)
            message_id = await self.transport.send(
                EmailMessage(
                    to=(identity.email,),
                    subject=rendered.subject,
                    html_body=rendered.html_body,
                    text_body=rendered.text_body,
                )
            )
        except VillageTechException as e:
            logger.warning(
                "Activation email not delivered for tenant %s (admin %s): %s",
                tenant.id,
                identity.user_id,
                e.message,
            )
            return StepOutcome.soft_fail(e.message)
        except Exception as e:
            logger.exception(
                "Activation email failed for tenant %s (admin %s)", tenant.id, identity.user_id
            )
            return StepOutcome.soft_fail(f"Email send failed: {str(e) or e.__class__.__name__}")

        logger.info(
            "Activation email sent for tenant %s (admin %s, message_id=%s)",
            tenant.id,
            identity.user_id,
            message_id,
        )
        return StepOutcome.ok(message_id)
