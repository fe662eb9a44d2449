from smartsplit.model import LedgerEntry
from smartsplit.suggest import generate_split_suggestions


def test_large_module_reports_size_only():
	entries = {"./chart": LedgerEntry(load_count=1, file_size=200000)}
	[suggestion] = generate_split_suggestions(entries)
	assert suggestion.module_identity == "./chart"
	assert "size exceeds 100 KB" in suggestion.reason
	assert "Load count" not in suggestion.reason


def test_frequent_module_reports_load_count_only():
	entries = {"./util": LedgerEntry(load_count=5, file_size=500)}
	[suggestion] = generate_split_suggestions(entries)
	assert "Load count exceeds 3" in suggestion.reason
	assert "size" not in suggestion.reason


def test_both_reasons_are_concatenated():
	entries = {"./big": LedgerEntry(load_count=9, file_size=300000)}
	reason = generate_split_suggestions(entries)[0].reason
	assert reason.index("size exceeds") < reason.index("Load count exceeds")


def test_thresholds_are_strict_and_missing_size_is_ignored():
	entries = {
		"at-limit": LedgerEntry(load_count=3, file_size=102400),
		"no-size": LedgerEntry(load_count=2),
	}
	assert generate_split_suggestions(entries) == []


def test_custom_thresholds_and_ledger_order():
	entries = {
		"z": LedgerEntry(load_count=2, file_size=10),
		"a": LedgerEntry(load_count=0, file_size=2048),
		"m": LedgerEntry(load_count=0, file_size=10),
	}
	suggestions = generate_split_suggestions(entries, size_threshold=1024, load_count_threshold=1)
	assert [s.module_identity for s in suggestions] == ["z", "a"]
	assert "1 KB" in suggestions[1].reason
	assert generate_split_suggestions(entries, 1024, 1) == suggestions
