"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance without circular imports. Limit strings live here.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

PROVISION_TENANT_LIMIT = "5/minute"
TENANT_READ_LIMIT = "60/minute"

limit_provision_tenant = limiter.limit(PROVISION_TENANT_LIMIT)
limit_tenant_reads = limiter.limit(TENANT_READ_LIMIT)
