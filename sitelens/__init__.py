"""sitelens - website brand and description analyzer."""

from sitelens.models.result import ErrorCategory, ScrapeRequest, ScrapeResult
from sitelens.models.enhancement import EnhancementOutcome, EnhancementStatus
from sitelens.models.website import WebsiteRecord, WebsiteRecordCreate, WebsiteRecordUpdate
from sitelens.config import AnalyzerConfig
from sitelens.core.enhancer import DescriptionEnhancer
from sitelens.core.orchestrator import Analyzer, to_record
from sitelens.core.exporter import result_filename, save_json
from sitelens.storage import WebsiteStore, SQLiteWebsiteStore

__version__ = "0.1.0"

__all__ = [
    # Main interface
    "Analyzer",
    "AnalyzerConfig",
    "DescriptionEnhancer",
    "to_record",
    # Models
    "ErrorCategory",
    "ScrapeRequest",
    "ScrapeResult",
    "EnhancementOutcome",
    "EnhancementStatus",
    "WebsiteRecord",
    "WebsiteRecordCreate",
    "WebsiteRecordUpdate",
    # Storage
    "WebsiteStore",
    "SQLiteWebsiteStore",
    # Export utilities
    "result_filename",
    "save_json",
    "__version__",
]
