"""Domain layer - Pure graph model, algorithms and decision procedure."""
