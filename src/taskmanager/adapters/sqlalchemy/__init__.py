"""SQLAlchemy adapter – models, session factory, UoW, repositories, predicate lowering."""
from taskmanager.adapters.sqlalchemy.mixins import SoftDeleteMixin, TimestampMixin, utcnow
from taskmanager.adapters.sqlalchemy.models import Base, TaskModel, UserModel
from taskmanager.adapters.sqlalchemy.predicate import compile_predicate, escape_like
from taskmanager.adapters.sqlalchemy.repository import (
    SqlAlchemyRepositoryBase,
    SqlAlchemyTaskRepository,
    SqlAlchemyUserRepository,
)
from taskmanager.adapters.sqlalchemy.session import SqlAlchemySessionFactory
from taskmanager.adapters.sqlalchemy.uow import SqlAlchemyUnitOfWork, translate_db_error

__all__ = [
    "Base",
    "SoftDeleteMixin",
    "SqlAlchemyRepositoryBase",
    "SqlAlchemySessionFactory",
    "SqlAlchemyTaskRepository",
    "SqlAlchemyUnitOfWork",
    "SqlAlchemyUserRepository",
    "TaskModel",
    "TimestampMixin",
    "UserModel",
    "compile_predicate",
    "escape_like",
    "translate_db_error",
    "utcnow",
]
