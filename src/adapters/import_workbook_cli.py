"""CLI adapter to import a portfolio workbook.

This module wires the ImportWorkbookUseCase to the concrete adapters and
replaces the stored portfolio with the content of the given ``.xlsx`` file.
"""

import argparse
from pathlib import Path

from src.infrastructure.container import (
    build_import_use_case,
    initialize_database,
)
from src.infrastructure.logging.logger import get_app_logger


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Replace the stored portfolio with a workbook."
    )
    parser.add_argument("path", type=Path, help="Workbook (.xlsx) to import")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the import and print a one-line summary.

    Returns:
        int: Process exit code (0 on success).
    """
    args = _parse_args(argv)
    logger = get_app_logger()
    if not args.path.is_file():
        logger.error(f"Workbook not found: {args.path}")
        print(f"Workbook not found: {args.path}")
        return 1

    initialize_database()
    use_case = build_import_use_case()
    result = use_case.execute(args.path.read_bytes())

    if not result.success:
        print(result.message)
        return 1
    print(
        f"{result.message}: {result.snapshot_count} snapshots, "
        f"{result.asset_count} assets, {result.value_count} values."
    )
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
