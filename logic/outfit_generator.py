"""Random outfit suggestions drawn from the catalog."""
from __future__ import annotations

import logging
import random
from typing import Iterable, Optional

from logic.views import items_in_category
from models.outfit import GeneratedOutfit
from models.taxonomy import BOTTOM, OUTERWEAR, TOP
from models.wardrobe_item import Item
from wardrobe_app.errors import MissingCategoryError

logger = logging.getLogger(__name__)


def generate(items: Iterable[Item], rng: Optional[random.Random] = None) -> GeneratedOutfit:
    """Draw one Top, one Bottom and, when any exist, one Outerwear.

    Draws are independent and uniform; nothing about earlier results is
    remembered. Raises :class:`MissingCategoryError` when there is no Top or no
    Bottom to draw from.
    """

    chooser = rng or random
    pool = list(items)
    tops = items_in_category(pool, TOP)
    bottoms = items_in_category(pool, BOTTOM)
    outerwear_options = items_in_category(pool, OUTERWEAR)

    missing = tuple(name for name, options in ((TOP, tops), (BOTTOM, bottoms)) if not options)
    if missing:
        logger.info("Cannot generate outfit, missing categories: %s", missing)
        raise MissingCategoryError(missing)

    top = chooser.choice(tops)
    bottom = chooser.choice(bottoms)
    outerwear = chooser.choice(outerwear_options) if outerwear_options else None
    outfit = GeneratedOutfit(top=top, bottom=bottom, outerwear=outerwear)
    logger.info(
        "Generated outfit top=%s bottom=%s outerwear=%s",
        outfit.top.id,
        outfit.bottom.id,
        outfit.outerwear.id if outfit.outerwear else None,
    )
    return outfit


__all__ = ["generate"]
