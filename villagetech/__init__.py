"""VillageTech platform: tenant provisioning service."""

__version__ = "1.0.0"
