"""
Command-line entry point for census generation.

Examples:
  # One file with five employee-only households
  census-generate --households 5

  # Three files of employee + spouse + child households, reproducible
  census-generate --files 3 --households 10 --composition "Employee + Spouse + Child" --seed 42
"""

import argparse
import logging
import sys
from typing import List, Optional

from .models import CompositionPolicy
from .pipeline import CensusGenerator, GenerationRequest
from .delivery import DirectoryDelivery
from .exceptions import CensusError

logger = logging.getLogger(__name__)


def non_negative_int(value: str) -> int:
    """argparse type for seeds: numpy only accepts non-negative seeds"""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid seed: '{value}'")
    if number < 0:
        raise argparse.ArgumentTypeError(f"seed must be non-negative, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='census-generate',
        description='Generate synthetic census/enrollment spreadsheets',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split('Examples:', 1)[1] if __doc__ else None
    )
    # Counts are taken as strings and clamped, never rejected
    parser.add_argument('--files', type=str, default='1',
                        help='Number of files to generate (1-5, default: 1)')
    parser.add_argument('--households', type=str, default='5',
                        help='Households per file (1-10, default: 5)')
    parser.add_argument('--composition', type=str,
                        default=CompositionPolicy.EMPLOYEE_ONLY.value,
                        choices=[p.value for p in CompositionPolicy],
                        help='Household composition (default: Employee Only)')
    parser.add_argument('--seed', type=non_negative_int, default=None,
                        help='Random seed for reproducibility')
    parser.add_argument('--output-dir', type=str, default='./output',
                        help='Directory to write files into (default: ./output)')
    parser.add_argument('--log-level', type=str, default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level (default: INFO)')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    request = GenerationRequest.create(args.files, args.households, args.composition)
    logger.info(
        f"Generating {request.num_files} file(s), {request.num_households} "
        f"household(s) each, composition '{request.composition.value}'"
    )

    generator = CensusGenerator(seed=args.seed)
    try:
        paths = generator.export_batch(request, DirectoryDelivery(args.output_dir))
    except CensusError as e:
        logger.error(str(e))
        return 1

    for path in paths:
        print(path)
    return 0


if __name__ == '__main__':
    sys.exit(main())
