"""Record and view-state models."""
