"""Core types, configuration and logging shared across the engine."""
