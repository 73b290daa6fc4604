"""Infrastructure layer: persistence, identity and email adapters, security."""
