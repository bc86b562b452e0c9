# landscape/services/composer.py
from typing import List
from landscape.models.requests import FeatureSelection

NATIVE_PLANTING = (
    "grass completely removed and replaced with low-water Colorado native perennials, "
    "grasses, and shrubs (80%+ native coverage)"
)
RAIN_GARDEN = "downspout routed into a beautiful infiltration basin / rain garden with native wetland plants"

HARDSCAPE_LAYOUTS = {
    "walkway": "permeable walkway",
    "walkway-patio": "permeable walkway AND patio",
}
HARDSCAPE_MATERIALS = {
    "stone": "natural stone",
    "pavers": "pavers",
}

CULINARY_GUILD = "culinary herb and vegetable guild"
MEDICINAL_GUILD = "medicinal herb guild"
FRUIT_GUILD = "fruit tree and berry bush guild"

SUBJECT_CLAUSE = "Photorealistic landscape design for a real Fort Collins, Colorado yard."
REFERENCE_CLAUSE = "Redesign the yard in the supplied photo, keeping its camera angle and framing."
CONSTRAINT_CLAUSES = (
    "ONLY modify the yard/grass/plants/soil/landscape features.",
    "DO NOT change house, roof, windows, garage, driveway, sidewalks, fences, or any architecture.",
    "Natural daylight, high detail, professional photography style.",
)


def feature_phrases(selection: FeatureSelection) -> List[str]:
    """Ordered phrases for the enabled toggles: planting, rain garden, hardscape, guilds."""
    features: List[str] = []
    if selection.native_planting:
        features.append(NATIVE_PLANTING)
    if selection.rain_garden:
        features.append(RAIN_GARDEN)
    if selection.hardscape:
        layout = HARDSCAPE_LAYOUTS[selection.hardscape_type]
        material = HARDSCAPE_MATERIALS[selection.hardscape_material]
        features.append(f"{layout} made of {material}")
    if selection.edible_guild:
        guilds = []
        if selection.culinary_guild:
            guilds.append(CULINARY_GUILD)
        if selection.medicinal_guild:
            guilds.append(MEDICINAL_GUILD)
        if selection.fruit_guild:
            guilds.append(FRUIT_GUILD)
        # all guilds go in as one combined feature
        if guilds:
            features.append(", ".join(guilds))
    return features


def compose_prompt(selection: FeatureSelection, has_reference: bool = False) -> str:
    lines = [SUBJECT_CLAUSE]
    if has_reference:
        lines.append(REFERENCE_CLAUSE)

    features = feature_phrases(selection)
    if features:
        lines.append(f"Include these specific features: {', '.join(features)}.")

    lines.extend(CONSTRAINT_CLAUSES)
    return "\n".join(lines)
