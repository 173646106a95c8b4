"""Infrastructure layer: configuration and wiring."""
