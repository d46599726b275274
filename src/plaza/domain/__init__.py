"""Domain layer: aggregates, value objects and repository interfaces."""
