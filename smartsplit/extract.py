from __future__ import annotations

import errno
import functools
import logging
import os
from typing import Any, List, Optional

import tree_sitter
import tree_sitter_javascript as tsjs

from .errors import SourceSyntaxError
from .model import (
	DefaultExportRelation,
	ImportRelation,
	NamedExportRelation,
	RelationRecord,
)

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_MARKER = "default"

# stat() failures that mean the id is not a real path
_MISSING_ERRNOS = {errno.ENOENT, errno.ENOTDIR, errno.ENAMETOOLONG}


def unit_size(unit_id: str) -> Optional[int]:
	"""Byte size of the unit on disk, or None when it does not resolve to a file."""
	try:
		return os.stat(unit_id).st_size
	except ValueError:
		# embedded NUL
		return None
	except OSError as e:
		if e.errno in _MISSING_ERRNOS:
			return None
		raise


@functools.lru_cache(maxsize=None)
def get_parser() -> tree_sitter.Parser:
	return tree_sitter.Parser(tree_sitter.Language(tsjs.language()))


def _text(node: Any, code: bytes) -> str:
	return code[node.start_byte:node.end_byte].decode("utf-8")


def _name(node: Any, code: bytes) -> str:
	"""Identifier text, or the unquoted value of a string-literal name."""
	text = _text(node, code)
	if node.type == "string":
		return text[1:-1]
	return text


def _first_error(node: Any) -> Optional[Any]:
	if node.type == "ERROR" or node.is_missing:
		return node
	for child in node.children:
		if child.has_error or child.is_missing:
			found = _first_error(child)
			if found is not None:
				return found
	return None


def _import_symbols(node: Any, code: bytes) -> List[str]:
	symbols: List[str] = []
	for clause in node.named_children:
		if clause.type != "import_clause":
			continue
		for part in clause.named_children:
			if part.type == "identifier":
				symbols.append(_text(part, code))
			elif part.type == "namespace_import":
				symbols.extend(_text(c, code) for c in part.named_children if c.type == "identifier")
			elif part.type == "named_imports":
				for spec in part.named_children:
					if spec.type != "import_specifier":
						continue
					local = spec.child_by_field_name("alias") or spec.child_by_field_name("name")
					symbols.append(_name(local, code))
	return symbols


def _import_relation(node: Any, code: bytes, unit_id: str, size: Optional[int]) -> ImportRelation:
	return ImportRelation(
		module_identity=_name(node.child_by_field_name("source"), code),
		symbols=_import_symbols(node, code),
		origin_unit=unit_id,
		unit_size_bytes=size,
	)


def _export_relation(node: Any, code: bytes, unit_id: str, size: Optional[int]) -> Optional[RelationRecord]:
	if any(child.type == "default" for child in node.children):
		target = node.child_by_field_name("declaration") or node.child_by_field_name("value")
		return DefaultExportRelation(
			module_identity=unit_id,
			symbols=[_default_name(target, code)],
			origin_unit=unit_id,
			unit_size_bytes=size,
		)

	clause = next((c for c in node.named_children if c.type == "export_clause"), None)
	if clause is None and node.child_by_field_name("declaration") is None:
		# export * from '...'
		return None

	symbols: List[str] = []
	if clause is not None:
		for spec in clause.named_children:
			if spec.type != "export_specifier":
				continue
			exported = spec.child_by_field_name("alias") or spec.child_by_field_name("name")
			symbols.append(_name(exported, code))
	return NamedExportRelation(
		module_identity=unit_id,
		symbols=symbols,
		origin_unit=unit_id,
		unit_size_bytes=size,
	)


def _default_name(target: Any, code: bytes) -> str:
	if target is None:
		return DEFAULT_EXPORT_MARKER
	if target.type == "identifier":
		return _text(target, code)
	# Named function or class
	ident = target.child_by_field_name("name")
	if ident is not None:
		return _text(ident, code)
	return DEFAULT_EXPORT_MARKER


def parse_module(text: str, unit_id: str) -> Any:
	code = text.encode("utf-8")
	tree = get_parser().parse(code)
	if tree.root_node.has_error:
		bad = _first_error(tree.root_node) or tree.root_node
		line = bad.start_point[0] + 1
		raise SourceSyntaxError(unit_id, f"Line {line}: unexpected syntax near {_text(bad, code)[:40]!r}")
	return tree


def extract_relations(text: str, unit_id: str) -> List[RelationRecord]:
	"""Extract import and export relations from one source unit.

	Parse errors propagate as SourceSyntaxError. A unit without any
	import or export declaration yields an empty list.
	"""
	tree = parse_module(text, unit_id)
	code = text.encode("utf-8")
	size = unit_size(unit_id)
	relations: List[RelationRecord] = []

	for node in tree.root_node.named_children:
		if node.type == "import_statement":
			relations.append(_import_relation(node, code, unit_id, size))
		elif node.type == "export_statement":
			relation = _export_relation(node, code, unit_id, size)
			if relation is not None:
				relations.append(relation)

	logger.debug("Extracted %d relations from %s", len(relations), unit_id)
	return relations
