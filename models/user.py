import re
from typing import Any

from sqlalchemy import CheckConstraint, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import UserDefinedType

from core.db import Base
from domain.user import Location

SRID = 4326

_POINT = re.compile(r"POINT\s*\(\s*(?P<lon>[-+0-9.eE]+)\s+(?P<lat>[-+0-9.eE]+)\s*\)")


class Geography(UserDefinedType):
    """PostGIS ``geography(Point,4326)`` column mapped to a ``Location``."""

    cache_ok = True

    def get_col_spec(self, **kw: Any) -> str:
        return f"geography(Point,{SRID})"

    def bind_expression(self, bindvalue: Any) -> Any:
        return func.ST_GeogFromText(bindvalue, type_=self)

    def column_expression(self, col: Any) -> Any:
        return func.ST_AsText(col, type_=self)

    def bind_processor(self, dialect: Any) -> Any:
        def process(value: Location | None) -> str | None:
            if value is None:
                return None
            return value.to_wkt()

        return process

    def result_processor(self, dialect: Any, coltype: Any) -> Any:
        def process(value: str | None) -> Location | None:
            if value is None:
                return None
            match = _POINT.search(value)
            if match is None:
                raise ValueError(f"unexpected point value: {value}")
            return Location(lon=float(match["lon"]), lat=float(match["lat"]))

        return process


class User(Base):
    """User model."""

    __tablename__ = "user"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    gender: Mapped[str] = mapped_column(String(16), nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    location: Mapped[Location] = mapped_column(Geography(), nullable=False)

    __table_args__ = (
        CheckConstraint("age >= 18", name="minimum_age"),
        Index("idx_user_location", "location", postgresql_using="gist"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
