"""Users – DTOs and service."""
