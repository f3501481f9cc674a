"""ORM model registry. Importing this module registers every table on Base.metadata.

Alembic ``env.py`` imports ``Base`` from here (not from ``base.py``) so that
autogenerate sees all tables.  Application code can also do::

    from app.models import FarmerProfile, FarmingDataset
"""

# ── Base & Mixins ───────────────────────────────────────────────────────────
from app.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

# ── Datasets ────────────────────────────────────────────────────────────────
from app.models.datasets import FarmingDataset

# ── Enums ───────────────────────────────────────────────────────────────────
from app.models.enums import DatasetTypeEnum

# ── Profiles ────────────────────────────────────────────────────────────────
from app.models.profiles import FarmerProfile

__all__ = [
    # Base & mixins
    "Base",
    # Enums
    "DatasetTypeEnum",
    # Profiles & datasets
    "FarmerProfile",
    "FarmingDataset",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
]
