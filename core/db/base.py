from sqlalchemy.orm import DeclarativeBase


class AbstractSQLModel(DeclarativeBase):
    """Declarative base shared by every table in the app."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} id={getattr(self, 'id', None)}>"
