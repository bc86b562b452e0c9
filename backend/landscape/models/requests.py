# landscape/models/requests.py
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional, Literal

HardscapeType = Literal["walkway", "walkway-patio"]
HardscapeMaterial = Literal["stone", "pavers"]


class FeatureSelection(BaseModel):
    """The user's toggles. Sub-fields only count when their parent is on."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    native_planting: bool = True
    rain_garden: bool = False
    hardscape: bool = False
    hardscape_type: HardscapeType = "walkway"
    hardscape_material: HardscapeMaterial = "pavers"
    edible_guild: bool = False
    culinary_guild: bool = False
    medicinal_guild: bool = False
    fruit_guild: bool = False


# --- Collaborator wire payloads (camelCase on the wire) ---

class DesignRequest(BaseModel):
    prompt: str
    isEdit: bool
    imageBase64: Optional[str] = None
    n: int = 1
    aspect: str = "16:9"


class BreakdownRequest(BaseModel):
    imageUrl: str
    tier: str = "Custom Landscape"


class TopViewRequest(BaseModel):
    imageUrl: str = Field(min_length=1)
