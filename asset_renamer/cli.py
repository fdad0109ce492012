"""Command line front end. Without arguments the desktop window is started."""
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Dict, List, Optional, Sequence

from .constants import ASSET_TYPE_PREFIX_LABELS, ASSET_TYPE_PREFIXES, OUTPUT_MODE_CUSTOM, OUTPUT_MODE_ORIGINAL
from .errors import DirectoryUnreadable, ValidationError
from .executor import plan_operations
from .log import setup_logging
from .naming import NamingRule
from .preview import GlobalToggles, OutputConfig, PreviewRow
from .session import RenameSession
from .settings import load_settings

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_REFUSED = 2
EXIT_PARTIAL = 3


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="asset-renamer",
        description="Rename asset files to Prefix_Name_Descriptor_Variant (dry run unless --apply).",
    )
    p.add_argument("folder", help="Folder whose files are renamed")
    p.add_argument("--prefix", default="T", choices=ASSET_TYPE_PREFIXES,
                   help="Asset type prefix: " + ", ".join(f"{k}={v}" for k, v in ASSET_TYPE_PREFIX_LABELS.items()))
    p.add_argument("--name", default="name", help="Base asset name, e.g. Soldier or Soldier_Helmet")
    p.add_argument("--variant", default="01", help="Variant segment, e.g. 01 or A (empty to omit)")
    p.add_argument("--descriptor", action="append", default=[], metavar="FILE=DESC",
                   help="Set the descriptor of one file (repeatable)")
    p.add_argument("--manual-descriptor", metavar="TEXT",
                   help="Use TEXT as descriptor for every file instead of the detected ones")
    p.add_argument("--force-auto-prefix", action="store_true",
                   help="Use the prefix detected from each file's extension when there is one")
    p.add_argument("--skip", action="append", default=[], metavar="FILE",
                   help="Leave FILE out of the rename (repeatable)")
    p.add_argument("--output", help="Move renamed files into this folder instead of renaming in place")
    p.add_argument("--apply", action="store_true", help="Actually rename (default: preview only)")
    p.add_argument("--settings", help="Settings file (default: ~/.asset_renamer.json)")
    p.add_argument("--log-level", help="DEBUG, INFO, WARNING or ERROR")
    return p


def _parse_descriptors(values: Sequence[str]) -> Dict[str, str]:
    result: Dict[str, str] = {}
    for value in values:
        if "=" not in value:
            raise SystemExit(f"--descriptor expects FILE=DESC, got {value!r}")
        name, descriptor = value.split("=", 1)
        result[name] = descriptor
    return result


def print_preview(rows: Sequence[PreviewRow], out=None) -> None:
    out = out or sys.stdout
    width = max((len(r.original_name) for r in rows), default=0)
    for row in rows:
        mark = "x" if row.selected else " "
        status = "will rename" if row.will_rename else "unchanged"
        conflict = "  (prefix conflict)" if row.has_prefix_conflict else ""
        print(f"[{mark}] {row.original_name:<{width}}  ->  {row.new_name}  [{status}]{conflict}", file=out)
    selected = sum(1 for r in rows if r.selected)
    print(f"{len(rows)} files, {selected} selected", file=out)


def run_cli(args: argparse.Namespace) -> int:
    settings = load_settings(args.settings)
    setup_logging(args.log_level or settings.log_level)

    output = OutputConfig(OUTPUT_MODE_CUSTOM, args.output) if args.output else OutputConfig(OUTPUT_MODE_ORIGINAL)
    session = RenameSession(
        rule=NamingRule(asset_type_prefix=args.prefix, asset_name=args.name, variant=args.variant),
        toggles=GlobalToggles(
            use_manual_descriptor=args.manual_descriptor is not None,
            force_auto_prefix=args.force_auto_prefix,
        ),
        output=output,
    )
    try:
        session.load_folder(args.folder, reset_selection=True, reset_descriptors=True)
    except DirectoryUnreadable as exc:
        print(f"[ERR] {exc}", file=sys.stderr)
        return EXIT_REFUSED

    paths_by_name = {f.name: f.path for f in session.files}
    for name, descriptor in _parse_descriptors(args.descriptor).items():
        if name not in paths_by_name:
            logger.warning("--descriptor: no file named %s", name)
            continue
        session.set_descriptor(paths_by_name[name], descriptor)
    if args.manual_descriptor is not None:
        for path in paths_by_name.values():
            session.set_manual_descriptor(path, args.manual_descriptor)
    for name in args.skip:
        if name not in paths_by_name:
            logger.warning("--skip: no file named %s", name)
            continue
        session.set_selected(paths_by_name[name], False)

    print_preview(session.rows)
    if not args.apply:
        print("[INFO] Dry run, nothing renamed. Pass --apply to rename.")
        return EXIT_OK

    try:
        plan_operations(session.rows, session.rule, session.overrides, session.toggles, session.output)
        if output.is_custom:
            os.makedirs(output.path, exist_ok=True)
        result = session.execute()
    except ValidationError as exc:
        print(f"[ERR] {exc}", file=sys.stderr)
        return EXIT_REFUSED

    print(f"[INFO] {result.summary()}")
    for failure in result.failures:
        print(f"[ERR] {failure.error}", file=sys.stderr)
    return EXIT_OK if result.ok else EXIT_PARTIAL


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        from .app import main as run_gui

        return run_gui()
    return run_cli(build_parser().parse_args(argv))
