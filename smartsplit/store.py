from __future__ import annotations

import json
import logging
import os
import tempfile
from typing import Any, Optional

from .errors import CorruptStoreError

logger = logging.getLogger(__name__)


class JsonStore:
	"""Handle on the single JSON document that holds the usage ledger.

	Callers own its lifecycle: open one per build and pass it to the
	ledger. The handle holds no cached state, every read hits disk.
	"""

	def __init__(self, path: str):
		self.path = os.path.abspath(path)

	def exists(self) -> bool:
		return os.path.exists(self.path)

	def read(self) -> Optional[Any]:
		if not self.exists():
			return None
		try:
			with open(self.path, "r", encoding="utf-8") as fh:
				return json.load(fh)
		except (json.JSONDecodeError, UnicodeDecodeError) as e:
			raise CorruptStoreError(self.path, str(e)) from e

	def write(self, document: Any) -> None:
		"""Replace the stored document in full.

		The new content is written next to the target and moved into
		place, so a failure never leaves a half-written file.
		"""
		directory = os.path.dirname(self.path)
		os.makedirs(directory, exist_ok=True)
		fd, tmp_path = tempfile.mkstemp(prefix=".smartsplit-", suffix=".json", dir=directory)
		try:
			with os.fdopen(fd, "w", encoding="utf-8") as fh:
				json.dump(document, fh, indent=2, ensure_ascii=False)
				fh.write("\n")
			os.replace(tmp_path, self.path)
		except BaseException:
			if os.path.exists(tmp_path):
				os.unlink(tmp_path)
			raise
		logger.debug("Wrote usage store %s", self.path)

