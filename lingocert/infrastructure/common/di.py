from collections.abc import Callable
from typing import TypeVar

from dependency_injector.providers import Provider

from lingocert.core import container
from lingocert.database import DatabaseSession

T = TypeVar("T")


def inject_use_case(provider: Provider[T]) -> Callable[[DatabaseSession], T]:
    """
    Create a FastAPI dependency for a container provider.

    Overrides container.db with the request-scoped database session while
    the use case graph is built; every repository and unit of work in that
    graph shares the one session.
    """

    def dependency(db: DatabaseSession) -> T:
        try:
            container.db.override(db)
            return provider()
        finally:
            container.db.reset_override()

    return dependency
