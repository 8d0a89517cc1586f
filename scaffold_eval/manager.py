#!/usr/bin/env python3
import argparse
import logging

from .allocator import TOTAL_UNITS, compute_allocations
from .config import load_settings
from .errors import EvaluationError, SubmissionError, suggest_fix
from .load_projects import load_projects
from .report import build_allocation_output, print_evaluation_summary, save_allocation_output
from .submit import ZERO_ADDRESS, build_metadata, load_account, submit

logger = logging.getLogger(__name__)


def run_allocate(settings, csv_path=None, output_path=None):
    """Dry run: load the round results and compute allocations without sending anything."""
    csv_path = csv_path or settings.csv_file
    projects = load_projects(csv_path)
    allocations = compute_allocations(projects, TOTAL_UNITS)

    submitter = load_account(settings).address if settings.private_key else ZERO_ADDRESS
    metadata = build_metadata(settings, submitter)

    print_evaluation_summary(projects, allocations, TOTAL_UNITS)
    if output_path:
        save_allocation_output(
            build_allocation_output(projects, allocations, metadata, settings, TOTAL_UNITS),
            output_path,
        )
    return projects, allocations


def run_evaluate(settings, csv_path=None, output_path=None, w3=None, contract=None):
    """Load, compute, validate and submit the allocations in one evaluate() call."""
    account = load_account(settings)
    logger.info(f"ℹ️ Wallet address: {account.address}")

    csv_path = csv_path or settings.csv_file
    projects = load_projects(csv_path)
    logger.info(f"ℹ️ Processing {len(projects)} projects (evaluate only, recipients are not updated)")

    allocations = compute_allocations(projects, TOTAL_UNITS)
    logger.info(f"ℹ️ Sample allocations: {allocations[:5]}")

    metadata = build_metadata(settings, account.address)
    tx = submit(allocations, metadata, settings, TOTAL_UNITS, account=account, w3=w3, contract=contract)
    logger.info(f"✅ Evaluation completed successfully! tx: {tx.tx_hash}")

    print_evaluation_summary(projects, allocations, TOTAL_UNITS)
    if output_path:
        save_allocation_output(
            build_allocation_output(projects, allocations, metadata, settings, TOTAL_UNITS, tx=tx),
            output_path,
        )
    return tx


def build_parser():
    parser = argparse.ArgumentParser(description="ScaffoldIE RPGF round evaluator")
    parser.add_argument("--verbose", action="store_true", help="Log allocation details")
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    allocate_parser = subparsers.add_parser("allocate", help="Compute allocations without submitting")
    allocate_parser.add_argument("--csv", type=str, help="Round results CSV (default: CSV_FILE from .env)")
    allocate_parser.add_argument("--output", type=str, help="Write allocations to this JSON file")

    evaluate_parser = subparsers.add_parser("evaluate", help="Compute allocations and submit evaluate()")
    evaluate_parser.add_argument("--csv", type=str, help="Round results CSV (default: CSV_FILE from .env)")
    evaluate_parser.add_argument("--output", type=str, help="Write allocations and tx details to this JSON file")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s - %(levelname)s - %(message)s')

    if args.command is None:
        parser.print_help()
        return 2

    try:
        if args.command == "allocate":
            logger.info("Computing RPGF allocations (dry run)…")
            settings = load_settings(require_private_key=False)
            run_allocate(settings, args.csv, args.output)
        elif args.command == "evaluate":
            logger.info("Starting RPGF evaluation…")
            settings = load_settings(require_private_key=True)
            run_evaluate(settings, args.csv, args.output)
    except EvaluationError as e:
        logger.error(f"❌ {e}")
        if isinstance(e, SubmissionError) and e.tx_hash:
            logger.error(f"Transaction hash: {e.tx_hash}")
        logger.error(f"Suggestion: {e.hint}")
        return 1
    except Exception as e:
        logger.error(f"❌ {type(e).__name__}: {e}")
        logger.error(f"Suggestion: {suggest_fix(e)}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
