"""
taskmanager – task management REST service.

Import path convention::

    from taskmanager.tasks import TaskFilterCriteria, TaskSpecification
    from taskmanager.adapters.sqlalchemy import compile_predicate
    from taskmanager.adapters.fastapi import create_app
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
