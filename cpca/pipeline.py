"""
Address Parsing Pipeline - wraps AddressParser with timing, quality flags
and statistics for single and batch processing.
"""
from typing import Any, Dict, Iterable, List, Optional
from multiprocessing import Pool
import time
import logging

from tqdm import tqdm

from .config import CHUNK_SIZE, MAX_WORKERS
from .parser import AddressParser, get_parser
from .region import ParsedAddress

logger = logging.getLogger(__name__)


def quality_flag(parsed: ParsedAddress) -> str:
    """
    Classify a parse result.

    Returns:
        One of config.QUALITY_FLAGS
    """
    if parsed.is_complete():
        return 'full_address'
    if parsed.has_province() and parsed.has_city():
        return 'province_city'
    if parsed.has_province():
        return 'province_only'
    if parsed.has_district():
        return 'district_only'
    return 'no_match'


def _build_result(raw_address: str, parser: AddressParser) -> Dict[str, Any]:
    """
    Parse one address and package the result.

    Unexpected exceptions are reported per address so a batch keeps going.
    """
    start_time = time.time()

    try:
        parsed = parser.parse(raw_address)
        final_output = {
            **parsed.to_dict(),
            'full_address': parsed.full_address(),
            'match_level': parsed.match_level()
        }
        flag = quality_flag(parsed)
        status = 'success' if parsed.has_province() or parsed.has_city() else 'failed'

    except Exception as e:
        logger.exception(f"Failed to parse address: {raw_address!r}")
        final_output = {'error': str(e)}
        flag = 'no_match'
        status = 'error'

    total_time = (time.time() - start_time) * 1000

    return {
        'raw_input': raw_address,
        'final_output': final_output,
        'quality_flag': flag,
        'status': status,
        'total_time_ms': round(total_time, 3)
    }


# Per-process parser for multi-process batches
_WORKER_PARSER: Optional[AddressParser] = None


def _init_worker(parser: AddressParser):
    global _WORKER_PARSER
    _WORKER_PARSER = parser


def _process_in_worker(raw_address: str) -> Dict[str, Any]:
    return _build_result(raw_address, _WORKER_PARSER)


class AddressPipeline:
    """
    Main pipeline for address parsing.

    Example:
        >>> pipeline = AddressPipeline()
        >>> result = pipeline.process("广东省深圳市南山区科技园路1号")
        >>> result['final_output']['district']
        '南山区'
        >>> result['quality_flag']
        'full_address'
    """

    def __init__(self, parser: Optional[AddressParser] = None):
        """
        Args:
            parser: Parser to use (default: shared instance from get_parser())
        """
        self.parser = parser or get_parser()
        self.stats = {
            'total_processed': 0,
            'successful': 0,
            'failed': 0
        }

    def process(self, raw_address: str) -> Dict[str, Any]:
        """
        Process a single address.

        Returns:
            Dictionary containing:
            - raw_input: Input string
            - final_output: province/city/district/detail/full_address/match_level
            - quality_flag: see config.QUALITY_FLAGS
            - status: 'success', 'failed' or 'error'
            - total_time_ms: Processing time
        """
        result = _build_result(raw_address, self.parser)
        self._update_stats(result)
        return result

    def process_batch(
        self,
        addresses: Iterable[str],
        workers: Optional[int] = MAX_WORKERS,
        show_progress: bool = False
    ) -> List[Dict[str, Any]]:
        """
        Process multiple addresses, preserving input order.

        Args:
            addresses: Raw address strings
            workers: Number of worker processes (None or 1 = in-process)
            show_progress: Show a tqdm progress bar

        Returns:
            List of result dictionaries
        """
        addresses = list(addresses)
        results = []

        if workers and workers > 1 and len(addresses) > 1:
            logger.info(f"Processing {len(addresses)} addresses with {workers} workers")
            with Pool(workers, initializer=_init_worker, initargs=(self.parser,)) as pool:
                iterator = pool.imap(_process_in_worker, addresses, chunksize=CHUNK_SIZE)
                for result in tqdm(iterator, total=len(addresses), desc="Parsing addresses",
                                   disable=not show_progress):
                    results.append(result)
        else:
            for address in tqdm(addresses, desc="Parsing addresses", disable=not show_progress):
                results.append(_build_result(address, self.parser))

        for result in results:
            self._update_stats(result)

        return results

    def _update_stats(self, result: Dict[str, Any]):
        self.stats['total_processed'] += 1
        if result['status'] == 'success':
            self.stats['successful'] += 1
        else:
            self.stats['failed'] += 1

    def get_stats(self) -> Dict[str, Any]:
        """
        Get pipeline statistics.

        Returns:
            Statistics dictionary
        """
        return {
            **self.stats,
            'success_rate': (
                self.stats['successful'] / self.stats['total_processed']
                if self.stats['total_processed'] > 0 else 0
            )
        }

    def reset_stats(self):
        """Reset statistics counters."""
        self.stats = {
            'total_processed': 0,
            'successful': 0,
            'failed': 0
        }
