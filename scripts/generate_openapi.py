from __future__ import annotations

import argparse
import json
from pathlib import Path

from library_api.main import app


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Export the library API OpenAPI document.")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("docs") / "openapi.json",
        help="Where to write the document (default: docs/openapi.json).",
    )
    return parser.parse_args()


def write_openapi(output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as f:
        json.dump(app.openapi(), f, indent=2, sort_keys=True)


def main() -> None:
    args = parse_args()
    write_openapi(args.output)
    print(f"OpenAPI document for {app.title} {app.version} written to {args.output}")


if __name__ == "__main__":
    main()
