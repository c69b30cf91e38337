"""Per-intent detectors, the free-text pipeline and the focused-mode registry."""
