from __future__ import annotations

import argparse
from pathlib import Path

from scripts.library_seeder import seed_library


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed the library with authors and books.")
    parser.add_argument(
        "--data-file",
        type=Path,
        default=None,
        help="JSON array of author payloads; defaults to the built-in catalogue.",
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Delete all authors and books before seeding.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    stats = seed_library(data_file=args.data_file, reset=args.reset)
    print(
        "Seeding finished. "
        f"authors={stats.authors} books={stats.books} skipped={stats.skipped_authors}"
    )


if __name__ == "__main__":
    main()
