"""Integrations of the engine with web frameworks."""
