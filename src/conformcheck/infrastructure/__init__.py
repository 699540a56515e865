"""Infrastructure layer: language adapters and configuration I/O."""
