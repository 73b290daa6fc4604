"""Infrastructure implementations of application service interfaces."""

from villagetech.infrastructure.services.activation_email_renderer import (
    ActivationEmailRenderer,
)

__all__ = [
    "ActivationEmailRenderer",
]
