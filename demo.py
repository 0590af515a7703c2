"""
ADDRESS PARSING - DEMO
======================
Usage:
    # Built-in demo cases
    python demo.py

    # Single address mode
    python demo.py --address "广东省深圳市南山区科技园路1号"

    # Show parse stage decisions
    python demo.py --address "北京朝阳区" --debug
"""
import sys
import argparse
import logging

from cpca import config
from cpca.parser import get_parser


# Custom logging formatter with colored levels
class ColoredFormatter(logging.Formatter):
    """Formatter with colors per log level"""
    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[92m',      # Green
        'WARNING': '\033[93m',   # Yellow
        'ERROR': '\033[91m',     # Red
        'CRITICAL': '\033[1m\033[91m',  # Bold Red
    }
    RESET = '\033[0m'

    def format(self, record):
        log_color = self.COLORS.get(record.levelname, self.RESET)
        record.levelname = f"{log_color}{record.levelname}{self.RESET}"
        return super().format(record)


def setup_logging(debug=False):
    """
    Keep module logs quiet: WARNING and above, or everything with debug=True.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if debug else logging.WARNING)

    if root_logger.handlers:
        root_logger.handlers.clear()

    handler = logging.StreamHandler()
    if debug:
        handler.setFormatter(logging.Formatter('%(message)s'))
        handler.setLevel(logging.DEBUG)
    else:
        handler.setFormatter(ColoredFormatter('%(levelname)s - %(message)s'))
        handler.setLevel(logging.WARNING)
    root_logger.addHandler(handler)


# ANSI Color codes
class Colors:
    """Simple ANSI color codes for terminal output"""
    RESET = '\033[0m'
    CYAN_BOLD = '\033[1m\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'

    @staticmethod
    def disable():
        """Disable colors (for non-supporting terminals)"""
        Colors.RESET = ''
        Colors.CYAN_BOLD = ''
        Colors.GREEN = ''
        Colors.YELLOW = ''
        Colors.RED = ''


def colorize(text, color):
    return f"{color}{text}{Colors.RESET}"


DEMO_CASES = [
    ("完整地址", [
        "广东省深圳市南山区科技园路1号",
        "北京市朝阳区望京SOHO",
        "上海市浦东新区陆家嘴金融中心",
    ]),
    ("简称", [
        "广东深圳南山科技园",
        "深圳市南山区",
        "深圳南山",
    ]),
    ("市+区（无省）", [
        "杭州市西湖区",
        "成都武侯区",
    ]),
    ("只有城市", [
        "深圳市某某路123号",
    ]),
    ("直辖市", [
        "北京朝阳区",
        "上海徐汇区漕河泾",
        "重庆渝中区解放碑",
        "天津市南开区",
    ]),
    ("自治区", [
        "广西南宁市青秀区",
        "内蒙古呼和浩特市",
        "新疆乌鲁木齐市天山区",
    ]),
    ("自治州", [
        "云南省大理白族自治州大理市",
        "四川省甘孜藏族自治州康定市",
        "云南大理",
        "四川甘孜",
    ]),
    ("县级市", [
        "康定市",
        "义乌市",
        "昆山市",
        "寿光市",
    ]),
    ("不设区的市", [
        "广东省东莞市长安镇",
        "广东省中山市小榄镇",
    ]),
    ("重名区县（无上下文）", [
        "朝阳区",
    ]),
    ("无法识别", [
        "某某路123号",
        "",
    ]),
]

NORMALIZE_CASES = [
    ("广东", "深圳", "南山"),
    ("广东省", "深圳市", "南山区"),
    ("北京", "北京", "朝阳"),
    ("浙江", "杭州", None),
]


def show_result(address, result):
    print(f"输入: {address!r}")
    print(f"  省份: {result.province or '-'}")
    print(f"  城市: {result.city or '-'}")
    print(f"  区县: {result.district or '-'}")
    print(f"  详址: {result.detail!r}")
    status = colorize('完整', Colors.GREEN) if result.is_complete() else colorize(result.match_level(), Colors.YELLOW)
    print(f"  级别: {status}")
    print()


def run_demo(parser):
    print(colorize("=== 地址解析演示 ===", Colors.CYAN_BOLD))
    print()

    for title, addresses in DEMO_CASES:
        print(colorize(f"--- {title} ---", Colors.CYAN_BOLD))
        for address in addresses:
            show_result(address, parser.parse(address))

    print(colorize("=== 地址标准化演示 ===", Colors.CYAN_BOLD))
    print()

    for province, city, district in NORMALIZE_CASES:
        normalized = parser.normalize(province, city, district)
        print(f"normalize({province!r}, {city!r}, {district!r}) => {normalized!r}")


def main():
    arg_parser = argparse.ArgumentParser(description='Address parser demo')
    arg_parser.add_argument('--address', help='Parse a single address')
    arg_parser.add_argument('--debug', action='store_true', help='Log each parse stage')
    arg_parser.add_argument('--no-color', action='store_true', help='Disable colored output')
    args = arg_parser.parse_args()

    setup_logging(args.debug)
    config.DEBUG_MATCHING = args.debug
    if args.no_color or not sys.stdout.isatty():
        Colors.disable()

    parser = get_parser()

    if args.address is not None:
        show_result(args.address, parser.parse(args.address))
    else:
        run_demo(parser)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print(f"\n{colorize('Stopped by user', Colors.YELLOW)}")
        sys.exit(0)
