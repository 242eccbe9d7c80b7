"""Kernel – errors, value types and the predicate tree shared by every layer."""
