# ==============================================
# CLI: Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Run the storage decision on local files without a database.
#
# COMMANDS:
# ---------
# 1. Full structure analysis of a JSON file:
#    python -m dualstore.cli analyze data.json
#
# 2. Which store a single file would go to:
#    python -m dualstore.cli select photo.jpg
#    python -m dualstore.cli select export.json --mime application/json --log
#
# 3. Which store a multi-file upload would go to:
#    python -m dualstore.cli batch a.json b.xml c.png
#
# Exit code 1 when a file cannot be read or parsed.
# ==============================================

import argparse
import mimetypes
import sys
from pathlib import Path
from typing import List, Optional

from dualstore.analysis import analyze_structure, get_analysis_summary
from dualstore.errors import ParseError
from dualstore.file_types import get_file_extension
from dualstore.models import FileDescriptor
from dualstore.storage.file_router import parse_json_bytes
from dualstore.storage.selector import JSON_EXTENSIONS, select_store, select_store_for_batch


def _read_bytes(path: str) -> bytes:
    return Path(path).read_bytes()


def _descriptor_for(path: str, mime_type: Optional[str] = None) -> FileDescriptor:
    """Build a FileDescriptor for a local file, parsing JSON content."""
    data = _read_bytes(path)
    name = Path(path).name
    content = None
    if get_file_extension(name) in JSON_EXTENSIONS:
        content = parse_json_bytes(data, name)
    return FileDescriptor(
        filename=name,
        size_bytes=len(data),
        mime_type=mime_type or mimetypes.guess_type(name)[0] or "application/octet-stream",
        content=content,
    )


def cmd_analyze(args) -> int:
    data = _read_bytes(args.file)
    analysis = analyze_structure(parse_json_bytes(data, args.file))
    print(get_analysis_summary(analysis))
    return 0


def cmd_select(args) -> int:
    descriptor = _descriptor_for(args.file, args.mime)
    backend = select_store(descriptor, log_analysis=args.log)
    print(f"{descriptor.filename}: {backend.value}")
    return 0


def cmd_batch(args) -> int:
    names = [Path(path).name for path in args.files]
    backend = select_store_for_batch([{"filename": name} for name in names])
    print(f"{len(names)} file(s): {backend.value}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dualstore",
        description="Decide whether files belong in the relational or the document store.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Print the structure analysis of a JSON file")
    analyze.add_argument("file")
    analyze.set_defaults(func=cmd_analyze)

    select = subparsers.add_parser("select", help="Show the store chosen for one file")
    select.add_argument("file")
    select.add_argument("--mime", default=None, help="MIME type (guessed from the name by default)")
    select.add_argument("--log", action="store_true", help="Print the analysis summary for JSON files")
    select.set_defaults(func=cmd_select)

    batch = subparsers.add_parser("batch", help="Show the store chosen for a multi-file upload")
    batch.add_argument("files", nargs="+")
    batch.set_defaults(func=cmd_batch)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except (OSError, ParseError) as e:
        print(f"✗ {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
