#!/usr/bin/env python3
"""
Main entry point for address parsing.

Simple and clean interface:
- Process single address
- Process batch from CSV file
- Normalize province/city/district names
"""
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import pandas as pd

from . import config
from .config import OUTPUT_ENCODING, QUALITY_FLAGS
from .parser import get_parser
from .pipeline import AddressPipeline


def process_single(address: str, output_format: str = 'text'):
    """
    Process a single address.

    Args:
        address: Raw address string
        output_format: 'text' or 'json'
    """
    pipeline = AddressPipeline()
    result = pipeline.process(address)

    if output_format == 'json':
        print(json.dumps(result, indent=2, ensure_ascii=False))
        return result

    print(f"\nInput:  {result['raw_input']}")
    print(f"Status: {result['status']} ({result['quality_flag']})")
    print(f"Time:   {result['total_time_ms']}ms")

    output = result['final_output']
    if 'error' not in output:
        print(f"\nResult:")
        print(f"  Province: {output.get('province') or '-'}")
        print(f"  City:     {output.get('city') or '-'}")
        print(f"  District: {output.get('district') or '-'}")
        print(f"  Detail:   {output.get('detail')}")
        print(f"  Full:     {output.get('full_address')}")
    else:
        print(f"\nError: {output['error']}")

    return result


def process_batch(
    input_file: str,
    output_file: Optional[str] = None,
    column: Optional[str] = None,
    workers: Optional[int] = None
) -> pd.DataFrame:
    """
    Process addresses from a CSV file.

    Uses the `address` column if present, otherwise the first column.
    Output keeps the input columns and appends province, city, district,
    detail and quality_flag.

    Args:
        input_file: Path to input CSV
        output_file: Path to output CSV (optional)
        column: Address column name (optional)
        workers: Worker processes for parsing (optional)

    Returns:
        Result DataFrame
    """
    print(f"Reading from: {input_file}")

    try:
        df = pd.read_csv(input_file, dtype=str, keep_default_na=False, encoding='utf-8-sig')
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        print(f"Error reading input file: {e}")
        sys.exit(1)

    if column is None:
        column = 'address' if 'address' in df.columns else df.columns[0]
    if column not in df.columns:
        print(f"Error: column '{column}' not found (available: {', '.join(df.columns)})")
        sys.exit(1)

    addresses = df[column].tolist()
    print(f"Found {len(addresses)} addresses to process")

    pipeline = AddressPipeline()
    results = pipeline.process_batch(addresses, workers=workers, show_progress=True)

    parsed_df = pd.DataFrame([
        {
            'province': result['final_output'].get('province'),
            'city': result['final_output'].get('city'),
            'district': result['final_output'].get('district'),
            'detail': result['final_output'].get('detail', ''),
            'quality_flag': result['quality_flag'],
        }
        for result in results
    ], columns=['province', 'city', 'district', 'detail', 'quality_flag'])

    output_df = pd.concat(
        [df.drop(columns=[c for c in parsed_df.columns if c in df.columns]), parsed_df],
        axis=1
    )

    # Print stats
    counts = output_df['quality_flag'].value_counts()
    print(f"\nProcessing complete:")
    for flag in QUALITY_FLAGS:
        print(f"  {flag + ':':<16} {int(counts.get(flag, 0))}")

    stats = pipeline.get_stats()
    print(f"  Success rate:    {stats['success_rate']:.1%}")

    if output_file:
        save_path = Path(output_file)
        save_path.parent.mkdir(parents=True, exist_ok=True)
        output_df.to_csv(save_path, index=False, encoding=OUTPUT_ENCODING)
        print(f"\nResults saved to: {save_path}")
    else:
        print("Warning: No output file specified. Results were not saved.")

    return output_df


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description='Chinese Province/City/District Address Parser',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  # Process single address
  cpca -a "广东省深圳市南山区科技园路1号"

  # Process from file
  cpca -i input.csv -o results.csv --column address

  # JSON output
  cpca -a "北京朝阳区望京" --json

  # Normalize names
  cpca -n 广东 深圳 南山
        '''
    )

    parser.add_argument(
        '-a', '--address',
        help='Single address to process'
    )

    parser.add_argument(
        '-i', '--input',
        help='Input CSV file with addresses'
    )

    parser.add_argument(
        '-o', '--output',
        help='Output CSV file path'
    )

    parser.add_argument(
        '--column',
        help='Address column in the input CSV (default: "address" or the first column)'
    )

    parser.add_argument(
        '--workers',
        type=int,
        default=config.MAX_WORKERS,
        help='Worker processes for batch mode'
    )

    parser.add_argument(
        '-n', '--normalize',
        nargs='+',
        metavar='NAME',
        help='Normalize PROVINCE CITY [DISTRICT]'
    )

    parser.add_argument(
        '--json',
        action='store_true',
        help='Output as JSON (for single address)'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )

    args = parser.parse_args(argv)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s - %(message)s')
        config.DEBUG_MATCHING = True
    else:
        logging.basicConfig(level=logging.WARNING, format='%(levelname)s - %(message)s')

    # Validate arguments
    if not args.address and not args.input and not args.normalize:
        parser.print_help()
        print("\nError: One of --address, --input or --normalize must be provided")
        sys.exit(1)

    if args.normalize:
        if len(args.normalize) not in (2, 3):
            parser.error('--normalize takes PROVINCE CITY [DISTRICT]')
        province, city = args.normalize[:2]
        district = args.normalize[2] if len(args.normalize) == 3 else None
        print(get_parser().normalize(province, city, district))

    elif args.address:
        output_format = 'json' if args.json else 'text'
        process_single(args.address, output_format)

    elif args.input:
        process_batch(args.input, args.output, column=args.column, workers=args.workers)


if __name__ == '__main__':
    main()
