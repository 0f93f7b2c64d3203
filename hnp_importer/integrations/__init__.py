# HNP Importer — External Integrations

from .hacknplan_client import HacknPlanClient
from .hacknplan_writer import HacknPlanWriter, WriteResult

__all__ = [
    "HacknPlanClient",
    "HacknPlanWriter",
    "WriteResult",
]
