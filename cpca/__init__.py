"""
CPCA - Chinese Province / City / Area address parser.

Extracts province, city and district from a free-text address using a
static gazetteer, with support for short names (广东 -> 广东省), the four
municipalities and cities without districts.

    >>> import cpca
    >>> cpca.parse("深圳南山科技园")
    ParsedAddress(province='广东省', city='深圳市', district='南山区', detail='科技园')
    >>> cpca.normalize("广东", "深圳", "南山")
    '广东省深圳市南山区'

The bundled gazetteer (cpca/data/pca.csv) is a sample covering the
municipalities and selected provinces. For production use set
CPCA_DATA_FILE to a full national province,city,district CSV, or pass
AddressParser(data_path=...).
"""
from .region import ParsedAddress, Region
from .parser import AddressParser, get_parser, reset_parser, parse, normalize
from .utils.data_utils import RegionDataError, load_regions

__version__ = '0.3.0'

__all__ = [
    'AddressParser',
    'ParsedAddress',
    'Region',
    'RegionDataError',
    'get_parser',
    'reset_parser',
    'load_regions',
    'parse',
    'normalize',
]
