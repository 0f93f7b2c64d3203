# HNP Importer - Core Library
"""
Bulk ticket import for Hack'n'Plan.

Exports for cli.main and other consumers.
"""

from .builder import TicketBuilder
from .catalogs import CatalogSnapshot
from .config import ImporterConfig, load_config
from .grammar import AnnotationGrammar
from .models import TicketDraft
from .pipeline import ImportPipeline, ImportReport
from .reconcile import collect_unmatched_tags
from .splitter import TicketBlock, split_document

__all__ = [
    "AnnotationGrammar",
    "CatalogSnapshot",
    "ImportPipeline",
    "ImportReport",
    "ImporterConfig",
    "TicketBlock",
    "TicketBuilder",
    "TicketDraft",
    "collect_unmatched_tags",
    "load_config",
    "split_document",
]
