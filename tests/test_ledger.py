import json

import pytest

from smartsplit.errors import CorruptStoreError
from smartsplit.ledger import UsageLedger, to_document
from smartsplit.model import ImportRelation, NamedExportRelation
from smartsplit.store import JsonStore


def _ledger(tmp_path):
	return UsageLedger(JsonStore(str(tmp_path / "moduleUsage.json")))


def _import(module, symbols, size=None):
	return ImportRelation(module_identity=module, symbols=symbols, origin_unit="a.js", unit_size_bytes=size)


def test_load_missing_store_is_empty(tmp_path):
	assert _ledger(tmp_path).load() == {}


def test_merge_creates_and_persists_entries(tmp_path):
	ledger = _ledger(tmp_path)
	ledger.merge([
		_import("./b", ["x"], size=10),
		NamedExportRelation(module_identity="a.js", symbols=["y"], origin_unit="a.js"),
	])

	data = json.loads((tmp_path / "moduleUsage.json").read_text())
	assert data == {
		"./b": {"loadCount": 1, "imported": ["x"], "fileSize": 10},
		"a.js": {"loadCount": 1, "imported": ["y"]},
	}


def test_repeated_merge_accumulates(tmp_path):
	ledger = _ledger(tmp_path)
	for _ in range(4):
		ledger.merge([_import("./b", ["x", "z"])])

	entry = _ledger(tmp_path).load()["./b"]
	assert entry.load_count == 4
	assert entry.imported == ["x", "z"] * 4


def test_load_count_is_per_record_not_per_symbol(tmp_path):
	ledger = _ledger(tmp_path)
	entries = ledger.merge([_import("./b", ["a", "b", "c"]), _import("./b", [])])
	assert entries["./b"].load_count == 2
	assert entries["./b"].imported == ["a", "b", "c"]


def test_file_size_is_overwritten_by_latest_record(tmp_path):
	ledger = _ledger(tmp_path)
	ledger.merge([_import("./b", [], size=100)])
	assert ledger.merge([_import("./b", [], size=250)])["./b"].file_size == 250
	assert ledger.merge([_import("./b", [])])["./b"].file_size is None


def test_merge_order_independent_across_identities(tmp_path):
	first = UsageLedger(JsonStore(str(tmp_path / "one.json")))
	second = UsageLedger(JsonStore(str(tmp_path / "two.json")))
	a = _import("./a", ["p"], size=1)
	b = _import("./b", ["q"], size=2)

	first.merge([a])
	first.merge([b])
	second.merge([b])
	second.merge([a])

	assert to_document(first.load()) == to_document(second.load())


def test_empty_merge_leaves_ledger_unchanged(tmp_path):
	ledger = _ledger(tmp_path)
	ledger.merge([_import("./b", ["x"])])
	before = (tmp_path / "moduleUsage.json").read_text()
	ledger.merge([])
	assert (tmp_path / "moduleUsage.json").read_text() == before


def test_unknown_entry_keys_survive_rewrite(tmp_path):
	path = tmp_path / "moduleUsage.json"
	path.write_text(json.dumps({"./b": {"loadCount": 2, "imported": [], "owner": "team-ui"}}))
	_ledger(tmp_path).merge([_import("./b", ["x"])])
	assert json.loads(path.read_text())["./b"] == {"loadCount": 3, "imported": ["x"], "owner": "team-ui"}


@pytest.mark.parametrize("content", ["{not json", "[1, 2]", '{"./b": {"loadCount": "many"}}'])
def test_corrupt_store_is_fatal(tmp_path, content):
	path = tmp_path / "moduleUsage.json"
	path.write_text(content)
	with pytest.raises(CorruptStoreError):
		_ledger(tmp_path).merge([_import("./b", ["x"])])
	assert path.read_text() == content


def test_snapshot_is_detached(tmp_path):
	ledger = _ledger(tmp_path)
	ledger.merge([_import("./b", ["x"])])
	snap = ledger.snapshot()
	snap["./b"].imported.append("mutated")
	assert ledger.snapshot()["./b"].imported == ["x"]


def test_null_extra_keys_survive_rewrite(tmp_path):
	path = tmp_path / "moduleUsage.json"
	path.write_text(json.dumps({"./b": {"loadCount": 1, "imported": [], "note": None}}))
	_ledger(tmp_path).merge([_import("./b", [])])
	assert json.loads(path.read_text())["./b"] == {"loadCount": 2, "imported": [], "note": None}
