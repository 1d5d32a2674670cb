"""Engine diagnostics core package."""
