import inspect
from typing import Any, Callable, Dict, Type, TypeVar

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.db.core import SessionDep

T = TypeVar("T", bound="AbstractService")


class AbstractService:
    """
    Base class for request-scoped services.

    Subclasses list what they need in ``DEPENDENCIES`` (keyword name to
    FastAPI annotated dependency) and receive those values as keyword
    arguments when FastAPI builds them.
    """

    DEPENDENCIES: Dict[str, Any] = {"session": SessionDep}

    def __init__(self, session: AsyncSession, **kwargs):
        """
        Initialize the service with an AsyncSession.

        :param session: SQLAlchemy AsyncSession instance.
        """
        self.session = session

    @classmethod
    def _get_dependency_function(cls: Type[T]) -> Callable[..., T]:
        """
        Build a factory whose signature mirrors ``DEPENDENCIES`` so that
        FastAPI resolves each one before instantiating the service.
        """

        def factory(**kwargs) -> T:
            return cls(**kwargs)

        factory.__signature__ = inspect.Signature(
            [
                inspect.Parameter(
                    name, inspect.Parameter.KEYWORD_ONLY, annotation=annotation
                )
                for name, annotation in cls.DEPENDENCIES.items()
            ]
        )
        return factory

    @classmethod
    def get_dependency(cls: Type[T]) -> Any:
        """
        Returns a FastAPI dependency for this service.

        This can be used in route definitions to inject the service automatically.
        """
        return Depends(cls._get_dependency_function())
