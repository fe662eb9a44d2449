from __future__ import annotations

from typing import List, Mapping

from .model import LedgerEntry, Suggestion

DEFAULT_SIZE_THRESHOLD = 100 * 1024
DEFAULT_LOAD_COUNT_THRESHOLD = 3


def _format_kib(size: int) -> str:
	return f"{size / 1024:g} KB"


def split_reason(
	module_identity: str,
	entry: LedgerEntry,
	size_threshold: int = DEFAULT_SIZE_THRESHOLD,
	load_count_threshold: int = DEFAULT_LOAD_COUNT_THRESHOLD,
) -> str:
	"""Return the lazy-load reason for one entry, or "" when no threshold trips."""
	parts: List[str] = []
	if entry.file_size is not None and entry.file_size > size_threshold:
		parts.append(f"Module size exceeds {_format_kib(size_threshold)}.")
	if entry.load_count > load_count_threshold:
		parts.append(f"Load count exceeds {load_count_threshold}.")
	if not parts:
		return ""
	return " ".join([f'Consider lazy-loading module "{module_identity}".'] + parts)


def generate_split_suggestions(
	entries: Mapping[str, LedgerEntry],
	size_threshold: int = DEFAULT_SIZE_THRESHOLD,
	load_count_threshold: int = DEFAULT_LOAD_COUNT_THRESHOLD,
) -> List[Suggestion]:
	suggestions: List[Suggestion] = []
	for module_identity, entry in entries.items():
		reason = split_reason(module_identity, entry, size_threshold, load_count_threshold)
		if reason:
			suggestions.append(Suggestion(module_identity=module_identity, reason=reason))
	return suggestions
