"""PostgreSQL-backed enum types for ORM models.

Each StrEnum maps 1:1 to a PostgreSQL CREATE TYPE ... AS ENUM.
These are separate from the Pydantic StrEnums in app/schemas:
schema enums validate API payloads, ORM enums type database columns.
"""

from enum import StrEnum


class DatasetTypeEnum(StrEnum):
    """Source format of an uploaded farming dataset."""

    csv = "csv"
