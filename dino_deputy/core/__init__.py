"""Core runtime, services and debug tooling."""
