"""
Generation of the category mapping CSV file.

The :func:`write_category_map_csv` helper writes a CSV file linking each
HelpJuice category ID to the HelpScout category created for it.  The file is
kept after the run so that later fixes (moving articles, cleaning up
duplicates) can be done without querying both systems again.
"""

from __future__ import annotations

import csv
import os
from typing import Iterable

from juicescout.models.helpscout import CategoryMapping


def write_category_map_csv(
    mappings: Iterable[CategoryMapping], *, out_path: str = "reports/category_map.csv"
) -> str:
    """Write the category mappings to a CSV file.

    Parameters
    ----------
    mappings:
        Mappings returned by the category migration.  Orphan mappings are
        written with ``SourceID`` 0.
    out_path:
        Location of the CSV file to be written.  The parent directory is
        created automatically.

    Returns
    -------
    str
        The path of the generated CSV file.
    """
    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    with open(out_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["SourceID", "DestinationID", "Name"])
        for mapping in mappings:
            writer.writerow([mapping.source_id, mapping.destination_id, mapping.name])
    return out_path
