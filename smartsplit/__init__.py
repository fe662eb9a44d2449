"""Code-splitting advisor that learns from module usage across builds.

Modules:
- extract.py: import/export extraction from one JavaScript module.
- ledger.py: persistent per-module usage statistics.
- suggest.py: threshold-based lazy-load suggestions.
- plugin.py: the per-unit transform hook tying the three together.
"""

from .config import SmartSplitConfig, load_config
from .errors import ConfigurationError, CorruptStoreError, SmartSplitError, SourceSyntaxError
from .extract import extract_relations
from .ledger import UsageLedger
from .plugin import SmartSplitPlugin
from .store import JsonStore
from .suggest import generate_split_suggestions

__all__ = [
	"ConfigurationError",
	"CorruptStoreError",
	"JsonStore",
	"SmartSplitConfig",
	"SmartSplitError",
	"SmartSplitPlugin",
	"SourceSyntaxError",
	"UsageLedger",
	"extract_relations",
	"generate_split_suggestions",
	"load_config",
]
