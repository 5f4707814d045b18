"""Adapters driving the application layer."""
