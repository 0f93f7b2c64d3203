"""
HacknPlanWriter - Write-back integration for Hack'n'Plan.

Creates tags and work items via the REST API. Uses httpx for HTTP calls.
There is no retry: a failed write is reported and the run stops.
"""

import logging
from dataclasses import dataclass

import httpx

from ..config import ImporterConfig
from ..models import TicketDraft

logger = logging.getLogger(__name__)


@dataclass
class WriteResult:
    """Result of a Hack'n'Plan write operation."""

    success: bool
    item_id: int | None = None  # id of created tag / work item
    data: dict | None = None  # Response data from Hack'n'Plan
    error: str | None = None  # Error message if failed
    http_status: int | None = None  # HTTP status code


class HacknPlanWriter:
    """Create tags and work items in one Hack'n'Plan project."""

    def __init__(self, config: ImporterConfig, dry_run: bool | None = None):
        """
        Initialize HacknPlanWriter.

        Args:
            config: Importer config (API key, project, timeout).
            dry_run: If True, return the payload without sending. Defaults
                to config.dry_run.
        """
        self.config = config
        self.dry_run = config.dry_run if dry_run is None else dry_run
        self.base_url = config.project_url

    def _make_request(
        self,
        method: str,
        endpoint: str,
        json_data: dict,
        id_field: str,
    ) -> WriteResult:
        """Make authenticated request to the Hack'n'Plan API."""
        if self.dry_run:
            return WriteResult(
                success=True,
                data={"dry_run": True, "payload": json_data},
            )

        url = f"{self.base_url}/{endpoint}"
        headers = {
            "Authorization": f"ApiKey {self.config.api_key}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

        try:
            response = httpx.request(
                method,
                url,
                headers=headers,
                json=json_data,
                timeout=self.config.timeout,
            )
        except httpx.HTTPError as e:
            error_msg = f"Hack'n'Plan request failed: {e}"
            logger.error(error_msg)
            return WriteResult(success=False, error=error_msg)

        if response.status_code in (200, 201):
            try:
                data = response.json()
            except ValueError:
                data = {}
            if not isinstance(data, dict):
                data = {"value": data}
            return WriteResult(
                success=True,
                item_id=data.get(id_field),
                data=data,
                http_status=response.status_code,
            )

        error_msg = f"Hack'n'Plan API error {response.status_code}: {response.text[:200]}"
        logger.error(error_msg)
        return WriteResult(
            success=False,
            error=error_msg,
            http_status=response.status_code,
        )

    def create_tag(self, name: str) -> WriteResult:
        """
        Create a project tag.

        Args:
            name: Tag name

        Returns:
            WriteResult with the new tag id
        """
        return self._make_request("POST", "tags", {"name": name}, id_field="tagId")

    def submit_ticket(self, draft: TicketDraft) -> WriteResult:
        """
        Create a work item from a draft.

        Args:
            draft: Built ticket

        Returns:
            WriteResult with the new work item id
        """
        return self._make_request("POST", "workitems", draft.to_payload(), id_field="workItemId")
