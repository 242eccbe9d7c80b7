"""Observability – structured logging helpers."""
from taskmanager.observability.logging.filters import DEFAULT_SENSITIVE_FIELDS, SensitiveFieldsFilter
from taskmanager.observability.logging.processors import CorrelationProcessor, get_logger
from taskmanager.observability.logging.factory import JsonLoggerFactory
from taskmanager.observability.logging.audit import AuditAction, AuditEntity, AuditLogger

__all__ = [
    "AuditAction",
    "AuditEntity",
    "AuditLogger",
    "CorrelationProcessor",
    "DEFAULT_SENSITIVE_FIELDS",
    "JsonLoggerFactory",
    "SensitiveFieldsFilter",
    "get_logger",
]
