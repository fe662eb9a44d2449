from __future__ import annotations

import fnmatch
import re
from typing import Callable, List, Optional, Sequence, Union

PatternLike = Union[str, re.Pattern[str]]
FilterPattern = Optional[Union[PatternLike, Sequence[PatternLike]]]

DEFAULT_INCLUDE: re.Pattern[str] = re.compile(r"\.(js|ts|vue)$")
DEFAULT_EXCLUDE: re.Pattern[str] = re.compile(r"node_modules")


def _compile(pattern: PatternLike) -> re.Pattern[str]:
	if isinstance(pattern, re.Pattern):
		return pattern
	# Plain strings are globs
	return re.compile(fnmatch.translate(pattern))


def _as_list(patterns: FilterPattern) -> List[re.Pattern[str]]:
	if patterns is None:
		return []
	if isinstance(patterns, (str, re.Pattern)):
		return [_compile(patterns)]
	return [_compile(p) for p in patterns]


def normalize_id(unit_id: str) -> str:
	return unit_id.replace("\\", "/")


def create_filter(include: FilterPattern = None, exclude: FilterPattern = None) -> Callable[[str], bool]:
	"""Build a predicate that accepts unit ids matching include and not exclude.

	With no include patterns every id not excluded is accepted.
	"""
	includes = _as_list(include)
	excludes = _as_list(exclude)

	def accepts(unit_id: str) -> bool:
		if "\0" in unit_id:
			return False
		normalized = normalize_id(unit_id)
		if any(p.search(normalized) for p in excludes):
			return False
		if not includes:
			return True
		return any(p.search(normalized) for p in includes)

	return accepts
