from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from schemagate.db.base import Base

HISTORY_TABLE = "schema_history"


class SchemaHistory(Base):
    __tablename__ = HISTORY_TABLE

    # Column order is part of the table contract: version, name, applied_on, checksum.
    version: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    applied_on: Mapped[str] = mapped_column(Text, nullable=False)
    checksum: Mapped[str] = mapped_column(Text, nullable=False)
