"""Asset kinds served by the report endpoints.

Each inspected asset class lives in its own table with a slightly different
identifier column. ``AssetKind`` captures those differences in one place so
the store, the JSON listing and the CSV export share a single code path.
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple, Type

from .models import Base, DamageReport, SolarPanelReport

DEFAULT_KIND = "windmill"


@dataclass(frozen=True)
class AssetKind:
    name: str
    model: Type[Base]
    id_column: str
    json_key: str
    csv_filename: str
    discriminator: Optional[str] = None
    columns: Tuple[str, ...] = field(init=False)

    def __post_init__(self):
        cols = ("id", self.id_column, "damage", "location", "image_path", "timestamp")
        object.__setattr__(self, "columns", cols)

    def new_row(self, asset_number: str, damage: str, location: str, image_path: str):
        values = {
            self.id_column: asset_number,
            "damage": damage,
            "location": location,
            "image_path": image_path,
        }
        if self.discriminator is not None:
            values["type"] = self.discriminator
        return self.model(**values)


WINDMILL = AssetKind(
    name="windmill",
    model=DamageReport,
    id_column="windmill_number",
    json_key="windmillNumber",
    csv_filename="windmill_damage_reports.csv",
    discriminator="windmill",
)

SOLAR = AssetKind(
    name="solar",
    model=SolarPanelReport,
    id_column="panel_id",
    json_key="panel_id",
    csv_filename="solar_panel_reports.csv",
)

ASSET_KINDS = {k.name: k for k in (WINDMILL, SOLAR)}


def get_asset_kind(name: Optional[str]) -> AssetKind:
    """Resolve a ``type`` form/query value.

    Only ``solar`` selects the panel table; blank or any other value falls
    back to windmill.
    """
    key = (name or "").strip()
    return ASSET_KINDS.get(key, ASSET_KINDS[DEFAULT_KIND])
