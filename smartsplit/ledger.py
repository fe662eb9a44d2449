from __future__ import annotations

import logging
from typing import Dict, Iterable, Mapping

from pydantic import TypeAdapter, ValidationError

from .errors import CorruptStoreError
from .model import LedgerEntry, RelationRecord
from .store import JsonStore

logger = logging.getLogger(__name__)

_LEDGER_ADAPTER = TypeAdapter(Dict[str, LedgerEntry])


class UsageLedger:
	"""Accumulated per-module usage statistics, persisted through a JsonStore.

	Each merge is a full load-modify-save cycle against the store. The
	ledger does no locking; callers must not merge concurrently against
	the same store.
	"""

	def __init__(self, store: JsonStore):
		self.store = store
		self._entries: Dict[str, LedgerEntry] = {}

	def load(self) -> Dict[str, LedgerEntry]:
		document = self.store.read()
		if document is None:
			self._entries = {}
			return self._entries
		if not isinstance(document, dict):
			raise CorruptStoreError(self.store.path, f"expected a JSON object, got {type(document).__name__}")
		try:
			self._entries = _LEDGER_ADAPTER.validate_python(document)
		except ValidationError as e:
			raise CorruptStoreError(self.store.path, str(e)) from e
		return self._entries

	def merge(self, records: Iterable[RelationRecord]) -> Dict[str, LedgerEntry]:
		entries = self.load()
		folded = 0
		for record in records:
			entry = entries.get(record.module_identity)
			if entry is None:
				entry = LedgerEntry()
				entries[record.module_identity] = entry
			if record.symbols:
				entry.imported.extend(record.symbols)
			entry.file_size = record.unit_size_bytes
			entry.load_count += 1
			folded += 1
		if folded:
			self.save()
			logger.debug("Merged %d relations into %d ledger entries", folded, len(entries))
		return entries

	def save(self) -> None:
		self.store.write(to_document(self._entries))

	def snapshot(self) -> Dict[str, LedgerEntry]:
		return {key: entry.model_copy(deep=True) for key, entry in self._entries.items()}


def to_document(entries: Mapping[str, LedgerEntry]) -> dict:
	return {key: entry.to_document() for key, entry in entries.items()}
