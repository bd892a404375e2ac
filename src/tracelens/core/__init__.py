"""Core layer: shared utilities, domain models and diagnostics computations."""
