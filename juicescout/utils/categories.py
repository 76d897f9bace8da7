from __future__ import annotations

from typing import Any, Dict, Iterable, List

from juicescout.models.helpjuice import Category
from juicescout.models.helpscout import CategoryMapping


def source_ids_by_name(categories: Iterable[Category]) -> Dict[str, int]:
    """Index HelpJuice categories by their exact name.

    Names are compared case-sensitively and without any normalization.  When
    two categories share a name the later one wins.
    """
    return {category.name: category.id for category in categories}


def build_category_mappings(
    categories: Iterable[Category], helpscout_items: Iterable[Dict[str, Any]]
) -> List[CategoryMapping]:
    """
    Link every category listed by HelpScout back to the HelpJuice category
    carrying the same name.

    HelpScout does not echo the HelpJuice ID on creation, so the name is the
    only join key and names must be unique within a run.  A listed category
    with no HelpJuice counterpart keeps ``source_id == 0``.

    :param categories: The HelpJuice categories that were migrated.
    :param helpscout_items: Raw ``items`` from the HelpScout category listing.
    :return: One mapping per listed category, in listing order.
    """
    by_name = source_ids_by_name(categories)
    mappings: List[CategoryMapping] = []
    for item in helpscout_items:
        name = item.get("name") or ""
        mappings.append(
            CategoryMapping(
                source_id=by_name.get(name, 0),
                destination_id=str(item.get("id") or ""),
                name=name,
            )
        )
    return mappings


def unmapped(mappings: Iterable[CategoryMapping]) -> List[CategoryMapping]:
    """Return the mappings with no HelpJuice category behind them."""
    return [m for m in mappings if not m.is_mapped]
