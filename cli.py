from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from smartsplit.config import SmartSplitConfig, build_config, load_config
from smartsplit.errors import SmartSplitError, SourceSyntaxError
from smartsplit.ledger import to_document
from smartsplit.plugin import SmartSplitPlugin
from smartsplit.scan import SCAN_INCLUDE, iter_source_units

logger = logging.getLogger("smartsplit.cli")


def make_config(args: argparse.Namespace, scanning: bool = False) -> SmartSplitConfig:
	base = load_config(args.config) if args.config else None
	include = None
	if scanning and (base is None or "include" not in base.model_fields_set):
		# Raw .ts and .vue files on disk are not plain JavaScript
		include = SCAN_INCLUDE
	return build_config(
		{
			"include": include,
			"store_path": os.path.abspath(args.store) if args.store else None,
			"size_threshold": args.size_threshold,
			"load_count_threshold": args.load_count_threshold,
		},
		base=base,
	)


def read_unit(path: str) -> str:
	try:
		with open(path, "r", encoding="utf-8") as fh:
			return fh.read()
	except UnicodeDecodeError as e:
		raise SourceSyntaxError(path, f"not valid UTF-8: {e}") from e


def print_suggestions(plugin: SmartSplitPlugin) -> None:
	print(json.dumps([s.to_document() for s in plugin.suggestions()], indent=2, ensure_ascii=False))


def cmd_analyze(args: argparse.Namespace) -> int:
	root = os.path.abspath(args.path)
	if not os.path.isdir(root):
		raise SmartSplitError(f"Not a directory: {root}")

	plugin = SmartSplitPlugin(make_config(args, scanning=True))
	processed = 0
	failed = 0
	for path in iter_source_units(root, plugin.filter):
		try:
			plugin.transform(read_unit(path), path)
		except SourceSyntaxError as e:
			if not args.keep_going:
				raise
			logger.error("Skipping unparsable unit: %s", e)
			failed += 1
			continue
		processed += 1

	logger.info("Processed %d units (%d skipped) under %s", processed, failed, root)
	print_suggestions(plugin)
	return 1 if failed else 0


def cmd_suggest(args: argparse.Namespace) -> int:
	print_suggestions(SmartSplitPlugin(make_config(args)))
	return 0


def cmd_ledger(args: argparse.Namespace) -> int:
	plugin = SmartSplitPlugin(make_config(args))
	print(json.dumps(to_document(plugin.ledger.load()), indent=2, ensure_ascii=False))
	return 0


def build_parser() -> argparse.ArgumentParser:
	common = argparse.ArgumentParser(add_help=False)
	common.add_argument("--config", help="JSON or YAML configuration file")
	common.add_argument("--store", help="Path of the usage store (moduleUsage.json)")
	common.add_argument("--size-threshold", type=int, help="Size in bytes above which a module is suggested")
	common.add_argument("--load-count-threshold", type=int, help="Load count above which a module is suggested")
	common.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])

	parser = argparse.ArgumentParser(prog="smartsplit")
	sub = parser.add_subparsers(dest="cmd", required=True)

	pa = sub.add_parser("analyze", parents=[common], help="Record usage for every source unit under a directory")
	pa.add_argument("path", help="Path to project root")
	pa.add_argument("--keep-going", action="store_true", help="Log unparsable units and continue")
	pa.set_defaults(func=cmd_analyze)

	ps = sub.add_parser("suggest", parents=[common], help="Print split suggestions for the current store")
	ps.set_defaults(func=cmd_suggest)

	pl = sub.add_parser("ledger", parents=[common], help="Print the persisted usage ledger")
	pl.set_defaults(func=cmd_ledger)
	return parser


def main(argv: Optional[List[str]] = None) -> int:
	args = build_parser().parse_args(argv)
	logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)
	try:
		return args.func(args)
	except SmartSplitError as e:
		print(f"smartsplit: {e}", file=sys.stderr)
		return 1


if __name__ == "__main__":
	raise SystemExit(main())
