"""
Error taxonomy for the importer.

Every fatal condition of a run is one of these. The CLI logs the message
and exits non-zero; nothing here is retried or swallowed.
"""


class ImporterError(Exception):
    """Base class for all importer failures."""

    pass


class ConfigurationError(ImporterError):
    """Missing or invalid configuration (credentials, project, board)."""

    pass


class MalformedDocumentError(ImporterError):
    """The input document cannot be read or a block is ill-formed."""

    def __init__(self, message: str, block_index: int | None = None):
        self.block_index = block_index
        if block_index is not None:
            message = f"Ticket block {block_index + 1}: {message}"
        super().__init__(message)


class UnresolvedMentionError(ImporterError):
    """An @-mention matched no user in the project."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Could not find a user for mention @{token}")


class UnresolvedImportanceError(ImporterError):
    """A !urgency marker matched no importance level."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Could not find an importance level for !{token}")


class MissingDefaultImportanceError(ImporterError):
    """No importance level is flagged as the project default."""

    def __init__(self):
        super().__init__(
            "No importance level is flagged as default and the ticket has no !urgency marker"
        )


class MissingCategoryError(ImporterError):
    """A ticket title resolved to no category."""

    def __init__(self, title: str):
        self.title = title
        super().__init__(f"No category resolved for ticket: {title!r}")


class RemoteServiceError(ImporterError):
    """A call to Hack'n'Plan failed."""

    def __init__(self, operation: str, detail: str, http_status: int | None = None):
        self.operation = operation
        self.detail = detail
        self.http_status = http_status
        status = f" (HTTP {http_status})" if http_status is not None else ""
        super().__init__(f"Hack'n'Plan {operation} failed{status}: {detail}")


class BulkTagCreationDeclined(ImporterError):
    """The operator declined creating the unmatched tags."""

    def __init__(self, tags: list[str]):
        self.tags = tags
        super().__init__(f"Aborted: creation of {len(tags)} missing tag(s) was declined")
