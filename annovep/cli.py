"""VEP CSQ tag annotator.

Adds a new sub-field to every transcript of the CSQ INFO field of a VCF/BCF
file, looked up by gene identifier in a two-column TSV table.

Usage:
    annovep [options] in.vcf -- TAG_NAME TSV_FILE

Key features:
- Reads and writes VCF/BCF (uncompressed/compressed), stdin/stdout with '-'
- Extends the CSQ Format description in the header with the new tag
- Transcripts whose gene is missing from the table get an empty value
- Optional YAML params file and YAML run summary
"""

import argparse
import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version
from pathlib import Path
from typing import List, Optional, Tuple

import yaml

from annovep.engine import AnnotationEngine, init_context
from annovep.errors import AnnoVepError, UsageError
from annovep.utils.logging import log_command, setup_logging
from annovep.utils.params import OUTPUT_TYPES, load_params
from annovep.utils.validation import check_input_exists, compute_md5, is_url
from annovep.vcf import VCFTagAnnotator


def _version() -> str:
    try:
        return pkg_version("annovep")
    except PackageNotFoundError:
        from annovep import __version__

        return __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="annovep",
        description="Add a tag to the CSQ field of VEP-annotated VCFs from a TSV lookup table.",
        usage="%(prog)s [options] in.vcf -- TAG_NAME TSV_FILE",
        epilog=(
            "Arguments after '--':\n"
            "  TAG_NAME  name of the new CSQ sub-field\n"
            "  TSV_FILE  two-column key/value table, path or http(s) URL"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=_version(),
        help="Show version and exit",
    )
    parser.add_argument("vcf", help="Input VCF/BCF file, '-' for stdin")
    parser.add_argument(
        "-o", "--output", default="-", help="Output file, '-' for stdout (default)"
    )
    parser.add_argument(
        "-O",
        "--output-type",
        dest="output_type",
        choices=OUTPUT_TYPES,
        default=None,
        help="v: VCF, z: compressed VCF, b: BCF, u: uncompressed BCF (default: v)",
    )
    parser.add_argument(
        "-f",
        "--field",
        dest="field",
        default=None,
        help="INFO field to annotate (default: CSQ)",
    )
    parser.add_argument(
        "-k",
        "--key-position",
        dest="key_position",
        type=int,
        default=None,
        help="0-based position of the key sub-field within a transcript (default: 4, VEP Gene)",
    )
    parser.add_argument(
        "-y",
        "--yaml",
        dest="params",
        required=False,
        help="Path to a params YAML overriding the defaults",
    )
    parser.add_argument(
        "-s",
        "--summary",
        dest="summary",
        required=False,
        help="Write a YAML run summary to this path",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (can be used multiple times, e.g. -vv)",
    )
    parser.add_argument("--log-file", dest="log_file", help="Also log to this file")
    return parser


def split_plugin_args(argv: List[str]) -> Tuple[List[str], List[str]]:
    """Split argv at the first '--' into annovep options and TAG_NAME TSV_FILE."""
    if "--" in argv:
        idx = argv.index("--")
        return argv[:idx], argv[idx + 1 :]
    return argv, []


def write_summary(path: Path, annotator: VCFTagAnnotator, table_md5: Optional[str]) -> None:
    ctx = annotator.engine.context
    summary = {
        "tag_name": ctx.tag_name,
        "table": ctx.table.source,
        "table_md5": table_md5,
        "table_entries": len(ctx.table),
        "field": ctx.field,
        "key_position": ctx.key_position,
        "input": annotator.input_vcf,
        "output": annotator.output_vcf,
        **annotator.summary.as_dict(),
    }
    with open(path, "w") as f:
        yaml.safe_dump(summary, f, sort_keys=False)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the annovep command-line interface.

    Returns:
        Process exit code
    """
    parser = build_parser()
    own_args, plugin_args = split_plugin_args(sys.argv[1:] if argv is None else list(argv))
    args = parser.parse_args(own_args)

    logger = setup_logging(args.verbose, Path(args.log_file) if args.log_file else None)
    log_command(logger)

    try:
        params = load_params(
            args.params,
            field=args.field,
            key_position=args.key_position,
            output_type=args.output_type,
        )
        context = init_context(
            plugin_args,
            field=params["field"],
            key_position=params["key_position"],
            outer_delimiter=params["outer_delimiter"],
            inner_delimiter=params["inner_delimiter"],
        )
        table_md5 = None
        if not is_url(context.table.source):
            table_md5 = compute_md5(Path(context.table.source).expanduser())
            logger.debug(f"Table MD5: {table_md5}")

        check_input_exists(args.vcf)
        annotator = VCFTagAnnotator(
            input_vcf=args.vcf,
            engine=AnnotationEngine(context),
            output_vcf=args.output,
            output_type=params["output_type"],
        )
        annotator.run()

        if args.summary:
            write_summary(Path(args.summary), annotator, table_md5)
            logger.info(f"Run summary written to {args.summary}")

    except UsageError as e:
        print(str(e), end="" if str(e).endswith("\n") else "\n")
        return 1
    except AnnoVepError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Error during execution: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
