"""Observability – structured logging, correlation ids and audit entries."""
