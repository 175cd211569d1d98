from sqlalchemy import String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from kasir.db import Base
from kasir.models.common import IdMixin, TSMMixin

# ── Record store ────────────────────────────────────────────────────────────
# One row per collection. `value` holds the whole collection as a JSON array.
class StoreEntry(Base, IdMixin, TSMMixin):
    __tablename__ = "store_entry"
    namespace: Mapped[str] = mapped_column(String(40))
    key: Mapped[str] = mapped_column(String(120))          # e.g. "pos_raw_materials"
    value: Mapped[str] = mapped_column(Text, default="[]")
    __table_args__ = (
        UniqueConstraint("namespace", "key", name="uq_store_entry_key"),
    )
