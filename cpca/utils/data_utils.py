"""
Gazetteer loading utilities.
Reads the bundled province/city/district table and exposes the static
province alias table.
"""
import csv
import time
import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from ..config import PCA_FILE, PCA_COLUMNS, PROVINCE_ALIASES
from ..region import Region

logger = logging.getLogger(__name__)


class RegionDataError(Exception):
    """Gazetteer could not be loaded."""
    pass


def load_regions(path: Optional[Union[str, Path]] = None) -> Tuple[Region, ...]:
    """
    Load administrative records from a CSV file.

    Expected header: province,city,district (extra columns are ignored).
    Rows missing province or city are skipped, an empty district becomes
    None, and duplicate rows are dropped keeping first-seen order.

    Args:
        path: CSV path (default: bundled pca.csv)

    Returns:
        Tuple of Region records

    Raises:
        RegionDataError: file missing, header incomplete or no usable rows

    Example:
        >>> regions = load_regions()
        >>> regions[0]
        Region(province='北京市', city='北京市', district='东城区')
    """
    return _load_regions_cached(Path(path) if path else PCA_FILE)


@lru_cache(maxsize=8)
def _load_regions_cached(path: Path) -> Tuple[Region, ...]:
    if not path.is_file():
        raise RegionDataError(f"Region data file not found: {path}")

    start_time = time.time()
    regions = []
    seen = set()
    skipped = 0

    try:
        with open(path, 'r', encoding='utf-8-sig', newline='') as f:
            reader = csv.DictReader(f)
            missing = [col for col in PCA_COLUMNS[:2] if col not in (reader.fieldnames or [])]
            if missing:
                raise RegionDataError(
                    f"Region data file {path} is missing column(s): {', '.join(missing)}"
                )

            for line_no, row in enumerate(reader, 2):
                province = (row.get('province') or '').strip()
                city = (row.get('city') or '').strip()
                district = (row.get('district') or '').strip() or None

                if not province or not city:
                    skipped += 1
                    logger.warning(f"Skipping incomplete row {line_no} in {path.name}: {row}")
                    continue

                region = Region(province, city, district)
                if region in seen:
                    continue
                seen.add(region)
                regions.append(region)
    except UnicodeDecodeError as e:
        raise RegionDataError(f"Region data file {path} is not valid UTF-8: {e}") from e

    if not regions:
        raise RegionDataError(f"No usable region records in {path}")

    elapsed = (time.time() - start_time) * 1000
    logger.info(f"Loaded {len(regions)} region records from {path.name} in {elapsed:.1f}ms")
    if skipped:
        logger.info(f"  Skipped {skipped} incomplete rows")

    return tuple(regions)


def province_aliases() -> Dict[str, str]:
    """
    Colloquial short name -> canonical province name.

    Example:
        >>> province_aliases()['内蒙古']
        '内蒙古自治区'
    """
    return dict(PROVINCE_ALIASES)
