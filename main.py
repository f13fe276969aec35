#!/usr/bin/env python3
"""
Fiscal QR Extraction System - Main Entry Point.

Command-line interface and programmatic access to the extraction ->
AT QR assembly -> PDF metadata injection chain.

Usage:
    Command Line:
        python main.py fatura.pdf talao.jpg
        python main.py ./faturas/ --output-dir ./outputs/ --workers 4

    Python:
        from main import run_processing
        report = run_processing(["fatura.pdf"])
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Set

from config import ConfigurationManager
from fiscal_qr.utils.logger import setup_logger_from_config, get_logger
from fiscal_qr.utils.helpers import ensure_directory, safe_filename
from fiscal_qr.input_handler import InputHandler
from fiscal_qr.models import DocumentInput
from fiscal_qr.pipeline import FiscalQRProcessor, BatchReport


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="Fiscal QR Extraction System",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    Process single invoice:
        python main.py fatura.pdf

    Process directory and save updated PDFs:
        python main.py ./faturas/ --output-dir ./outputs/

    Parallel batch:
        python main.py ./faturas/ --workers 4
        """
    )

    parser.add_argument(
        "inputs",
        nargs="+",
        help="Input files or directories containing fiscal documents"
    )

    parser.add_argument(
        "--output-dir", "-o",
        type=str,
        default=None,
        help="Directory for PDFs with injected AT QR metadata"
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to custom configuration file"
    )

    parser.add_argument(
        "--workers", "-w",
        type=int,
        default=None,
        help="Number of documents processed in parallel (default: batch.max_workers)"
    )

    # Logging options
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress console output"
    )

    return parser.parse_args(argv)


def initialize_system(args: argparse.Namespace) -> ConfigurationManager:
    """
    Load configuration and set up logging.

    Returns:
        Initialized configuration manager.
    """
    config = ConfigurationManager(args.config)

    logger = setup_logger_from_config(quiet=args.quiet)

    if args.debug:
        logger.setLevel(logging.DEBUG)
        for handler in logger.handlers:
            handler.setLevel(logging.DEBUG)

    logger.info("=" * 60)
    logger.info("FISCAL QR EXTRACTION SYSTEM")
    logger.info("=" * 60)
    logger.info(f"Version: {config.get('project.version', '1.0.0')}")

    return config


def collect_documents(inputs: Sequence[str]) -> List[Path]:
    """
    Expand input arguments into a list of files.

    Directories contribute their supported files in name order; explicit
    files are kept as given so unsupported types are reported.

    Raises:
        FileNotFoundError: If an input path doesn't exist.
    """
    logger = get_logger(__name__)
    supported = InputHandler().supported_extensions
    files: List[Path] = []

    for item in inputs:
        path = Path(item)
        if not path.exists():
            raise FileNotFoundError(f"Input path not found: {path}")

        if path.is_dir():
            found = sorted(
                p for p in path.iterdir()
                if p.is_file() and p.suffix.lower() in supported
            )
            if not found:
                logger.warning(f"No supported files found in: {path}")
            files.extend(found)
        else:
            files.append(path)

    return files


def unique_name(name: str, used: Set[str]) -> str:
    """name, or name with a _2, _3, ... suffix when already in used (case-insensitive)."""
    stem, suffix = Path(name).stem, Path(name).suffix
    candidate = name
    counter = 2
    while candidate.lower() in used:
        candidate = f"{stem}_{counter}{suffix}"
        counter += 1
    return candidate


def save_updated_documents(report: BatchReport, output_dir: str) -> List[Path]:
    """
    Write PDFs carrying injected metadata to output_dir.

    Inputs sharing a file name (e.g. a/fatura.pdf and b/fatura.pdf) are
    saved as fatura.pdf, fatura_2.pdf, ... in input order.
    """
    logger = get_logger(__name__)
    target = ensure_directory(output_dir)
    saved = []
    used = set()

    for file_name, content in report.updated_documents:
        name = unique_name(safe_filename(file_name), used)
        used.add(name.lower())
        path = target / name
        path.write_bytes(content)
        saved.append(path)
        logger.info(f"Saved: {path}")

    return saved


def run_processing(
    inputs: Sequence[str],
    output_dir: Optional[str] = None,
    config_path: Optional[str] = None,
    workers: Optional[int] = None
) -> BatchReport:
    """
    Run the fiscal QR chain over files and directories.

    Args:
        inputs: Input files or directories.
        output_dir: Where updated PDFs are written (None = keep in memory).
        config_path: Optional custom configuration file path.
        workers: Parallel documents (None = configuration default).

    Returns:
        BatchReport with results and progress lines.

    Example:
        >>> report = run_processing(["faturas/"])
        >>> for r in report.results:
        ...     print(r.file_name, r.encoded_qr_string)
    """
    logger = get_logger(__name__)
    ConfigurationManager(config_path)

    files = collect_documents(inputs)
    logger.info(f"Found {len(files)} file(s) to process")

    documents = [DocumentInput.from_path(p) for p in files]

    processor = FiscalQRProcessor(max_workers=workers)
    report = processor.process_batch(documents)

    for line in report.logs:
        logger.info(line)

    if output_dir:
        save_updated_documents(report, output_dir)

    return report


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main function - entry point for command-line execution.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        args = parse_arguments(argv)

        initialize_system(args)
        logger = get_logger(__name__)

        report = run_processing(
            inputs=args.inputs,
            output_dir=args.output_dir,
            config_path=args.config,
            workers=args.workers
        )

        stats = report.get_statistics()
        logger.info("=" * 60)
        logger.info(
            f"Total: {stats['total']} | Validated: {stats['processed']} | "
            f"Ignored: {stats['ignored']} | Updated PDFs: {stats['updated_documents']}"
        )
        logger.info("=" * 60)

        return 0

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nProcess interrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
