"""Command-line interface: extract records from pasted roll text, repair stored records."""

import argparse
import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import get_config
from .exceptions import EcrollError
from .logger import get_logger, set_debug
from .models import ExtractionResult, ExtractionStats
from .processors import extract_in_chunks, needs_repair, repair_record
from .processors.glyph_repair import GlyphRepairer
from .rules import DEFAULT_RULE_SET, load_rule_set
from .utils.file_utils import (
    read_id_list,
    read_input_text,
    read_records_json,
    write_records_csv,
    write_result_json,
)
from .utils.progress import get_progress
from .utils.timing import Timer, format_duration

console = Console()
logger = get_logger("ecroll.cli")

EXIT_OK = 0
EXIT_NO_MATCH = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ecroll",
        description="Repair and extract voter records from text copied out of EC roll PDFs",
    )
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    parser.add_argument(
        "--rules",
        help="JSON rule file extending the built-in glyph rules (default: ECROLL_RULES_FILE)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    extract = subparsers.add_parser("extract", help="Extract voter records from pasted text")
    extract.add_argument("inputs", nargs="*", help="Text files (default: stdin)")
    extract.add_argument("--csv", help="Write records to this CSV file")
    extract.add_argument("--json", help="Write the full result to this JSON file")
    extract.add_argument("--chunk-lines", type=int, help="Lines per chunk for parallel extraction")
    extract.add_argument("--workers", type=int, help="Worker threads")
    extract.add_argument("--existing-ids", help="File of voter ids already stored, one per line")
    extract.add_argument("--limit", type=int, default=50, help="Rows shown in the review table")

    repair = subparsers.add_parser("repair", help="Re-run glyph repair on stored records")
    repair.add_argument("records", help="JSON file of stored records")
    repair.add_argument("--csv", help="Write repaired records to this CSV file")
    repair.add_argument("--json", help="Write repaired records to this JSON file")
    repair.add_argument("--all", action="store_true", help="Repair every record, not only broken ones")
    repair.add_argument("--limit", type=int, default=50, help="Rows shown in the review table")

    return parser


def load_rules(rules_path=None):
    rules_path = rules_path or get_config().extraction.rules_file
    if not rules_path:
        return DEFAULT_RULE_SET
    rule_set = load_rule_set(rules_path)
    logger.info(f"📚 Loaded rule set {rule_set.version} from {rules_path}")
    return rule_set


def render_records(records, title: str, limit: int) -> None:
    table = Table(title=title, show_lines=False)
    table.add_column("#", justify="right")
    table.add_column("Voter ID")
    table.add_column("Name")
    table.add_column("Father / Husband")
    table.add_column("Mother")
    table.add_column("Birth date")
    table.add_column("Gender")
    table.add_column("Issues", style="yellow")

    for record in records[:limit]:
        table.add_row(
            record.serial_number,
            record.voter_id or "[red]—[/red]",
            escape(record.name),
            escape(record.father_name),
            escape(record.mother_name),
            escape(record.birth_date),
            record.gender.bn_label,
            ", ".join(issue.value for issue in record.issues),
        )

    console.print(table)
    if len(records) > limit:
        console.print(f"… {len(records) - limit} more record(s) not shown")


def run_extract(args, rule_set) -> int:
    config = get_config()
    if args.chunk_lines is not None:
        config.extraction.chunk_lines = args.chunk_lines
    if args.workers is not None:
        config.extraction.max_workers = args.workers
    config.extraction.validate()

    text = read_input_text(args.inputs)
    existing_ids = read_id_list(args.existing_ids) if args.existing_ids else None

    progress = get_progress(console)
    with progress:
        task = progress.add_task("🧾 Extracting records", total=1)
        result = extract_in_chunks(
            text,
            rule_set=rule_set,
            config=config,
            existing_ids=existing_ids,
            progress=progress,
            task_id=task,
        )

    if not result.matched:
        console.print(f"[bold red]{result.message}[/bold red]")
        return EXIT_NO_MATCH

    render_records(result.records, f"Voter records ({result.strategy})", args.limit)
    console.print(result.message)
    if result.ambiguous_records:
        logger.warning(f"⚠️ {len(result.ambiguous_records)} record(s) without a voter id need review")
    logger.debug(result.stats.summary_str())

    if args.csv:
        path = write_records_csv(result.records, args.csv)
        logger.info(f"✅ CSV written: {path}")
    if args.json:
        path = write_result_json(result, args.json)
        logger.info(f"✅ JSON written: {path}")

    return EXIT_OK


def run_repair(args, rule_set) -> int:
    config = get_config()
    records = read_records_json(args.records)
    repairer = GlyphRepairer(rule_set)

    targets = records if args.all else [r for r in records if needs_repair(r, repairer)]
    logger.info(f"🔧 {len(targets)} of {len(records)} record(s) selected for repair")

    repaired = [
        repair_record(r, rule_set=rule_set, default_occupation=config.extraction.default_occupation)
        for r in targets
    ]
    render_records(repaired, "Repaired records", args.limit)

    if args.csv:
        path = write_records_csv(repaired, args.csv)
        logger.info(f"✅ CSV written: {path}")
    if args.json:
        stats = ExtractionStats(records_emitted=len(repaired))
        path = write_result_json(ExtractionResult.ok(repaired, "repair", stats), args.json)
        logger.info(f"✅ JSON written: {path}")

    return EXIT_OK


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.debug:
        set_debug(True)

    timer = Timer()

    try:
        rule_set = load_rules(args.rules)
        if args.command == "extract":
            code = run_extract(args, rule_set)
        else:
            code = run_repair(args, rule_set)
    except EcrollError as e:
        logger.error(f"❌ {e}")
        return EXIT_ERROR

    logger.info(f"🎉 Done in {format_duration(timer.elapsed)}")
    return code


if __name__ == "__main__":
    sys.exit(main())
