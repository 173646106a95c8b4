"""Domain layer of the GBCE exchange."""
