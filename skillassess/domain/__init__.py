"""Domain layer for the skill assessment engine."""
