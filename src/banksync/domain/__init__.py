"""Domain layer: entities, value objects, ports and repository interfaces."""
