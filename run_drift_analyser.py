#!/usr/bin/env python3
"""
Command-line interface for running the Terraform Drift Analyser locally.

It requires AWS credentials to be configured (via AWS CLI, environment variables, or IAM roles).

Usage:
    python run_drift_analyser.py --state s3://your-bucket/path/to/terraform.tfstate
    python run_drift_analyser.py --state local://terraform.tfstate --output json://stdout
    python run_drift_analyser.py --state local://terraform.tfstate --log-level DEBUG
"""

import argparse
import sys
from typing import List, Optional

from src.config import Config
from src.drift_analyser import detect_drift
from src.drift_analyser.errors import DriftAnalyserError
from src.drift_analyser.filter import DEFAULT_DRIFTIGNORE_PATH
from src.drift_analyser.output import DEFAULT_OUTPUT, get_output
from src.utils import setup_logging

EXIT_IN_SYNC = 0
EXIT_DRIFT = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Detect drift between a Terraform state and live AWS resources",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_drift_analyser.py --state s3://my-terraform-bucket/terraform.tfstate
  python run_drift_analyser.py --state local://terraform.tfstate --region us-west-2 --log-level DEBUG
  python run_drift_analyser.py --state local://terraform.tfstate --output json://result.json
        """,
    )

    parser.add_argument(
        "--state",
        required=True,
        help="Terraform state to read (s3://bucket/key or local://path)",
    )

    parser.add_argument(
        "--region",
        default="eu-west-2",
        help="AWS region for API calls (default: eu-west-2)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )

    parser.add_argument(
        "--output",
        default=DEFAULT_OUTPUT,
        help="Report destination: console:// or json://PATH, json://stdout (default: console://)",
    )

    parser.add_argument(
        "--driftignore",
        default=DEFAULT_DRIFTIGNORE_PATH,
        help="Path to the ignore rules file (default: .driftignore)",
    )

    parser.add_argument(
        "--max-workers",
        type=int,
        default=4,
        help="Number of resource types enumerated in parallel (default: 4)",
    )

    parser.add_argument(
        "--max-retries",
        type=int,
        default=3,
        help="Maximum number of retries for AWS API calls (default: 3)",
    )

    parser.add_argument(
        "--timeout-seconds",
        type=int,
        default=30,
        help="Timeout for AWS API calls in seconds (default: 30)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command-line drift analyser."""
    args = build_parser().parse_args(argv)

    logger = setup_logging(args.log_level)

    try:
        config = Config(
            state_path=args.state,
            aws_region=args.region,
            log_level=args.log_level,
            driftignore_path=args.driftignore,
            output=args.output,
            max_workers=args.max_workers,
            max_retries=args.max_retries,
            timeout_seconds=args.timeout_seconds,
        ).validate()
    except ValueError as e:
        print(f"ERROR: {str(e)}", file=sys.stderr)
        return EXIT_ERROR

    output = get_output(config.output)
    printer = output.get_info_printer()

    try:
        logger.info(f"Running drift analysis for state: {config.state_path}")
        analysis = detect_drift(config, printer=printer)
        output.write(analysis)
    except (DriftAnalyserError, OSError) as e:
        logger.error(f"Error running drift analysis: {str(e)}")
        print(f"ERROR: {str(e)}", file=sys.stderr)
        return EXIT_ERROR

    # Exit with appropriate code
    if not analysis.is_sync():
        logger.warning(f"Drift detected! Exiting with code {EXIT_DRIFT}")
        return EXIT_DRIFT
    logger.info("No drift detected. Exiting with code 0")
    return EXIT_IN_SYNC


if __name__ == "__main__":
    sys.exit(main())
