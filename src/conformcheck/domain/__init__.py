"""Domain layer: model, exceptions, ports. No I/O."""
