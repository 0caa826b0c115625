"""Engine — framework-level route files registered after every container."""
