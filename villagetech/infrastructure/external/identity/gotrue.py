"""GoTrue (Supabase Auth) identity service via the admin users API.

POST {gotrue_url}/auth/v1/admin/users authenticated with the service-role key.
"""

from contextlib import asynccontextmanager
from typing import Any

import httpx

from villagetech.application.interfaces.services import IdentityUser
from villagetech.infrastructure.exceptions import IdentityConflictError, IdentityServiceError
from villagetech.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

_CONFLICT_CODES = frozenset({"email_exists", "user_already_exists"})


def _error_reason(response: httpx.Response) -> tuple[str, str | None]:
    """Return (message, error_code) from a GoTrue error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase, None
    if not isinstance(body, dict):
        return response.text or response.reason_phrase, None
    message = body.get("msg") or body.get("message") or body.get("error_description")
    return str(message or response.reason_phrase), body.get("error_code")


class GoTrueIdentityService:
    """IIdentityService backed by a GoTrue admin endpoint."""

    def __init__(
        self,
        base_url: str,
        service_role_key: str,
        *,
        timeout: float = 15.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._users_url = f"{base_url.rstrip('/')}/auth/v1/admin/users"
        self._service_role_key = service_role_key
        self._timeout = timeout
        self._shared_http = http_client

    @asynccontextmanager
    async def _http_cm(self):
        """Yield shared HTTP client or a short-lived one."""
        if self._shared_http is not None:
            yield self._shared_http
            return
        async with httpx.AsyncClient() as client:
            yield client

    async def create_user(
        self,
        email: str,
        password: str,
        *,
        email_confirmed: bool,
        metadata: dict[str, Any],
    ) -> IdentityUser:
        payload = {
            "email": email,
            "password": password,
            "email_confirm": email_confirmed,
            "user_metadata": metadata,
        }
        headers = {
            "apikey": self._service_role_key,
            "Authorization": f"Bearer {self._service_role_key}",
        }
        try:
            async with self._http_cm() as client:
                response = await client.post(
                    self._users_url, json=payload, headers=headers, timeout=self._timeout
                )
        except httpx.HTTPError as e:
            logger.error("GoTrue request failed for %s: %s", email, e)
            raise IdentityServiceError(f"Identity service unreachable: {e!s}") from e

        if response.is_error:
            reason, code = _error_reason(response)
            if code in _CONFLICT_CODES or "already" in reason.lower():
                logger.warning("GoTrue reports existing account for %s", email)
                raise IdentityConflictError(email)
            logger.error(
                "GoTrue rejected user creation for %s (status=%d): %s",
                email,
                response.status_code,
                reason,
            )
            raise IdentityServiceError(reason, status_code=response.status_code)

        try:
            body = response.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            raise IdentityServiceError("Identity service returned an unreadable user record")
        user_id = body.get("id")
        if not user_id:
            raise IdentityServiceError("Identity service returned no user id")
        logger.info("Created GoTrue identity %s for %s", user_id, email)
        return IdentityUser(
            id=user_id,
            email=body.get("email", email),
            email_confirmed=bool(body.get("email_confirmed_at")),
        )
