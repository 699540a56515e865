"""Application layer: registry, services, reporters."""
