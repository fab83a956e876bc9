"""Domain layer - pure types and rules, no I/O."""
