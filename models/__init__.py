"""Model package exports."""

from models.taxonomy import *  # noqa: F401,F403
from models.outfit import GeneratedOutfit, Outfit, PairingSuggestions, ResolvedOutfit, outfit_from_record
from models.wardrobe_item import Item, from_record

__all__ = [
    "Item",
    "from_record",
    "Outfit",
    "outfit_from_record",
    "ResolvedOutfit",
    "GeneratedOutfit",
    "PairingSuggestions",
]
