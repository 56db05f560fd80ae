class LegalIngestionError(Exception):
    """Base class for errors raised by the ingestion core."""


class DuplicateDocumentError(LegalIngestionError):
    """The document's content hash is already in the dedup registry."""

    def __init__(self, content_hash: str):
        super().__init__(f"Duplicate document: {content_hash}")
        self.content_hash = content_hash


class EmptyDocumentError(LegalIngestionError):
    """Nothing usable was left after cleaning or segmentation."""


class QueueBusyError(LegalIngestionError):
    """A queue operation was attempted while the queue is being processed."""


class InvalidJobTransition(LegalIngestionError):
    def __init__(self, job_id: str, current: str, target: str):
        super().__init__(f"Job {job_id}: cannot move from {current} to {target}")
        self.job_id = job_id
        self.current = current
        self.target = target
