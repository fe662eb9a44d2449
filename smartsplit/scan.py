from __future__ import annotations

import os
import re
from typing import Callable, Iterator, Optional

IGNORED_DIRS = {".git", "node_modules", "dist", "build", "__pycache__", ".vite", "coverage"}

# Files read straight from disk, before any build step has compiled them
SCAN_INCLUDE = re.compile(r"\.m?js$")


def iter_source_units(root: str, accepts: Optional[Callable[[str], bool]] = None) -> Iterator[str]:
	"""Yield file paths under root in a stable order, skipping vendored and build dirs."""
	for dirpath, dirnames, filenames in os.walk(root):
		dirnames[:] = sorted(d for d in dirnames if d not in IGNORED_DIRS)
		for filename in sorted(filenames):
			path = os.path.join(dirpath, filename)
			if accepts is None or accepts(path):
				yield path
