"""
Configuration settings for address parsing.
"""
import os
from pathlib import Path


# Base paths
BASE_DIR = Path(__file__).parent
DATA_DIR = BASE_DIR / 'data'

# Gazetteer (province,city,district rows). The bundled file is a sample;
# point CPCA_DATA_FILE at a full national table with the same header for
# production use.
PCA_FILE = Path(os.getenv('CPCA_DATA_FILE', str(DATA_DIR / 'pca.csv')))
PCA_COLUMNS = ('province', 'city', 'district')

# Direct-administered municipalities: province == city
MUNICIPALITIES = frozenset({'北京市', '上海市', '天津市', '重庆市'})

# Prefecture-level cities without county-level subdivision
NO_DISTRICT_CITIES = frozenset({'东莞市', '中山市', '儋州市', '嘉峪关市'})

# Colloquial short name -> canonical province-level name
PROVINCE_ALIASES = {
    # Provinces
    '广东': '广东省',
    '江苏': '江苏省',
    '浙江': '浙江省',
    '山东': '山东省',
    '河南': '河南省',
    '河北': '河北省',
    '四川': '四川省',
    '湖北': '湖北省',
    '湖南': '湖南省',
    '福建': '福建省',
    '安徽': '安徽省',
    '江西': '江西省',
    '陕西': '陕西省',
    '山西': '山西省',
    '辽宁': '辽宁省',
    '吉林': '吉林省',
    '黑龙江': '黑龙江省',
    '云南': '云南省',
    '贵州': '贵州省',
    '甘肃': '甘肃省',
    '海南': '海南省',
    '青海': '青海省',
    '台湾': '台湾省',
    # Autonomous regions
    '广西': '广西壮族自治区',
    '内蒙古': '内蒙古自治区',
    '西藏': '西藏自治区',
    '新疆': '新疆维吾尔自治区',
    '宁夏': '宁夏回族自治区',
    # Municipalities
    '北京': '北京市',
    '上海': '上海市',
    '天津': '天津市',
    '重庆': '重庆市',
    # Special administrative regions
    '香港': '香港特别行政区',
    '澳门': '澳门特别行政区',
}

# Administrative suffixes
PROVINCE_SUFFIX = '省'
CITY_SUFFIX = '市'
DISTRICT_SUFFIXES = ('区', '县', '市', '旗')       # stripped to build abbreviations
FULL_DISTRICT_SUFFIXES = ('区', '县', '旗')        # a district match ending in one of these outranks a city match
NORMALIZE_DISTRICT_SUFFIXES = ('区', '县', '市')   # tried in this order by normalize()

# Single-character abbreviations ("忠" from "忠县") collide with too much text
MIN_DISTRICT_ABBREVIATION_LENGTH = 2

# Quality flags by resolved levels, best first
QUALITY_FLAGS = (
    'full_address',    # province + city + district
    'province_city',   # province + city
    'province_only',   # province (district may be set, city unresolved)
    'district_only',   # ambiguous district, no context
    'no_match'
)

# Batch processing settings
CHUNK_SIZE = 500  # imap chunksize for multi-process batches
MAX_WORKERS = None  # None = single process

# Output settings
OUTPUT_ENCODING = 'utf-8-sig'

# Debug logging flags
DEBUG_MATCHING = False  # Log each parse stage decision (DEBUG level)
