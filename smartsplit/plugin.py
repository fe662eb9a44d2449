from __future__ import annotations

import json
import logging
from typing import List, Optional

from .config import SmartSplitConfig
from .extract import extract_relations
from .filters import create_filter
from .ledger import UsageLedger
from .model import Suggestion
from .store import JsonStore
from .suggest import generate_split_suggestions

logger = logging.getLogger(__name__)


class SmartSplitPlugin:
	"""Build-tool transform hook that records module usage and reports split suggestions.

	The host must call transform() for one unit at a time. Source text is
	always returned unchanged.
	"""

	name = "smart-split-plugin"

	def __init__(self, config: Optional[SmartSplitConfig] = None, store: Optional[JsonStore] = None):
		self.config = config or SmartSplitConfig()
		self.store = store or JsonStore(self.config.store_path)
		self.ledger = UsageLedger(self.store)
		self.filter = create_filter(self.config.include, self.config.exclude)

	def transform(self, code: str, unit_id: str) -> str:
		if not self.filter(unit_id):
			logger.debug("Skipping %s", unit_id)
			return code

		relations = extract_relations(code, unit_id)
		self.ledger.merge(relations)
		self.report(self.suggestions())
		return code

	def suggestions(self) -> List[Suggestion]:
		"""Suggestions for the ledger as currently persisted."""
		self.ledger.load()
		return generate_split_suggestions(
			self.ledger.snapshot(),
			size_threshold=self.config.size_threshold,
			load_count_threshold=self.config.load_count_threshold,
		)

	def report(self, suggestions: List[Suggestion]) -> None:
		logger.info(
			"Split suggestions: %s",
			json.dumps([s.to_document() for s in suggestions], ensure_ascii=False),
		)
