"""Infrastructure adapters: storage, settings, logging."""
