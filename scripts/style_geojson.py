#!/usr/bin/env python3
"""CLI script to compute a thematic style for a GeoJSON file."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

# Ensure the project source is importable when running the script directly.
_project_root = Path(__file__).resolve().parent.parent
_src = _project_root / "src"
if str(_src) not in sys.path:
    sys.path.insert(0, str(_src))

from cartostyle.core.config import Settings  # noqa: E402
from cartostyle.core.types import ClassificationMethod  # noqa: E402
from cartostyle.styling.engine import StylingEngine  # noqa: E402
from cartostyle.styling.errors import StylingError  # noqa: E402
from cartostyle.styling.expressions import (  # noqa: E402
    choropleth_to_expression,
    graduated_to_expression,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Classify a numeric GeoJSON property for choropleth or graduated styling."
    )
    parser.add_argument("geojson", type=str, help="Path to a GeoJSON FeatureCollection.")
    parser.add_argument(
        "--attribute",
        type=str,
        default=None,
        help="Property to style. Lists numeric properties when omitted.",
    )
    parser.add_argument(
        "--style",
        choices=["choropleth", "graduated", "statistics"],
        default="choropleth",
    )
    parser.add_argument("--classes", type=int, default=None, help="Number of classes.")
    parser.add_argument(
        "--method",
        choices=[m.value for m in ClassificationMethod],
        default=None,
    )
    parser.add_argument("--ramp", type=str, default=None, help="Colour ramp name.")
    parser.add_argument(
        "--expression",
        action="store_true",
        help="Also print the MapLibre paint expression.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    settings = Settings()
    engine = StylingEngine(config=settings.styling)

    with open(args.geojson) as fh:
        collection = json.load(fh)

    try:
        if args.attribute is None:
            result = {"numeric_properties": engine.numeric_properties(collection)}
        elif args.style == "statistics":
            stats = engine.get_statistics(collection, args.attribute)
            result = {"statistics": stats.model_dump(mode="json") if stats else None}
        elif args.style == "graduated":
            style = engine.create_graduated_style(collection, args.attribute)
            result = {"style": style.model_dump(mode="json")}
            if args.expression:
                result["expression"] = graduated_to_expression(style)
        else:
            style = engine.create_choropleth_style(
                collection,
                args.attribute,
                num_classes=args.classes,
                method=args.method,
                ramp_name=args.ramp,
            )
            result = {"style": style.model_dump(mode="json")}
            if args.expression:
                result["expression"] = choropleth_to_expression(
                    style, settings.styling.unclassified_color
                )
    except StylingError as exc:
        print(f"ERROR: {exc.message}", file=sys.stderr)
        print(json.dumps(exc.to_dict(), indent=2), file=sys.stderr)
        sys.exit(1)

    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
