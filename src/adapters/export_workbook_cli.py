"""CLI adapter to export the stored portfolio as a workbook."""

import argparse
from pathlib import Path

from src.infrastructure.container import (
    build_export_use_case,
    initialize_database,
)
from src.infrastructure.logging.logger import get_app_logger


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Export the stored portfolio to an .xlsx workbook."
    )
    parser.add_argument(
        "output_dir",
        nargs="?",
        type=Path,
        default=Path("."),
        help="Directory receiving portfolio_<date>.xlsx",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Write the workbook and print its path."""
    args = _parse_args(argv)
    logger = get_app_logger()

    initialize_database()
    result = build_export_use_case().execute()

    args.output_dir.mkdir(parents=True, exist_ok=True)
    target = args.output_dir / result.filename
    target.write_bytes(result.content)
    logger.info(f"Workbook written to {target}")
    print(f"Exported portfolio to {target}.")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
