"""External collaborators: identity service and outbound email."""
