"""Command line entry point: reconcile one part and write the suggestion files."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import default_config
from .mapping.suggestions import PropertySuggestionService
from .reconciliation.engine import ReconciliationEngine
from .report.review_report import ReviewReportGenerator, generate_review_without_llm
from .utils.io import load_drawing_record, load_part_record, load_properties, save_json

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="part-reconciler",
        description="Reconcile CAD part data with drawing data and suggest custom properties",
    )
    parser.add_argument("--part", help="Path to part record JSON (from the CAD property reader)")
    parser.add_argument("--drawing", help="Path to drawing record JSON (from the drawing analyzer)")
    parser.add_argument("--properties", help="Path to current custom properties JSON")
    parser.add_argument("--assembly", action="store_true", help="Generate assembly OP{n} slots instead of part slots")
    parser.add_argument("--start-op", type=int, default=None,
                        help=f"First assembly op number (default: {default_config.assembly_start_op_number})")
    parser.add_argument("--out", default=".", help="Output directory")
    parser.add_argument("--report", action="store_true", help="Also write a markdown review report")
    parser.add_argument("--llm", action="store_true", help="Write the review report with the OpenAI API")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    part = drawing = None
    properties = {}
    for path, loader, label in (
        (args.part, load_part_record, "part"),
        (args.drawing, load_drawing_record, "drawing"),
        (args.properties, load_properties, "properties"),
    ):
        if not path:
            continue
        data, err = loader(path)
        if err:
            print(f"Failed to load {label}: {err}", file=sys.stderr)
            return 1
        if label == "part":
            part = data
        elif label == "drawing":
            drawing = data
        else:
            properties = data

    if drawing is None:
        logger.info("No drawing supplied; result will be empty")

    config = default_config
    result = ReconciliationEngine(config).reconcile(part, drawing)

    service = PropertySuggestionService(config)
    if args.assembly:
        suggestions = service.generate_assembly_suggestions(result, properties, args.start_op)
    else:
        suggestions = service.generate_part_suggestions(result, properties)

    out_dir = Path(args.out)
    result_path = save_json(result.to_dict(), out_dir / config.result_output_file)
    suggestions_path = save_json(suggestions.to_dict(), out_dir / config.suggestions_output_file)

    print(f"Reconciliation: {result.summary}")
    print(f"  Property suggestions: {len(suggestions)}")
    if suggestions.has_unassigned:
        print(f"  Unassigned routing: {len(suggestions.unassigned)}")
    for conflict in result.conflicts:
        print(f"  CONFLICT {conflict.field}: model={conflict.model_value} drawing={conflict.drawing_value}")
    if result.rename is not None:
        print(f"  Rename: {result.rename.old_name} -> {result.rename.new_name}")

    written = [result_path, suggestions_path]
    if args.report:
        part_number = ""
        if drawing is not None and drawing.part_number:
            part_number = drawing.part_number
        elif part is not None and part.part_number:
            part_number = part.part_number

        if args.llm:
            report = ReviewReportGenerator(config=config).generate(result, suggestions, part_number)
        else:
            report = generate_review_without_llm(result, suggestions, part_number)

        report_path = out_dir / config.report_output_file
        report_path.write_text(report.to_markdown(), encoding="utf-8")
        print(f"  Review status: {report.status}")
        written.append(report_path)

    print(f"\nArtifacts saved to: {out_dir}/")
    for path in written:
        logger.debug("Wrote %s", path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
