from datetime import datetime

from sqlalchemy.orm import declarative_base, Mapped, mapped_column
from sqlalchemy import Integer, String, text, DateTime

Base = declarative_base()

class DamageReport(Base):
    """Inspection report for a windmill rotor blade."""
    __tablename__ = "damage_reports"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    windmill_number: Mapped[str | None] = mapped_column(String, nullable=True)
    damage: Mapped[str | None] = mapped_column(String, nullable=True)
    location: Mapped[str | None] = mapped_column(String, nullable=True)
    image_path: Mapped[str | None] = mapped_column(String, nullable=True)
    type: Mapped[str] = mapped_column(String, server_default=text("'windmill'"), default="windmill")
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=False), server_default=text("CURRENT_TIMESTAMP"))

class SolarPanelReport(Base):
    """Inspection report for a solar panel; the table itself is the discriminator."""
    __tablename__ = "solar_panel_reports"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    panel_id: Mapped[str | None] = mapped_column(String, nullable=True)
    damage: Mapped[str | None] = mapped_column(String, nullable=True)
    location: Mapped[str | None] = mapped_column(String, nullable=True)
    image_path: Mapped[str | None] = mapped_column(String, nullable=True)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=False), server_default=text("CURRENT_TIMESTAMP"))
