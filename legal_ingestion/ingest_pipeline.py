from __future__ import annotations

import time
import uuid
from collections import Counter
from datetime import datetime, timezone
from pathlib import Path
from statistics import mean
from typing import Any, Callable, Dict, Iterable, List, Optional

import orjson
from tqdm import tqdm

from common.config import ChunkingConfig, QueueConfig, yaml_config
from common.logger import get_logger
from legal_ingestion.dedup import DedupRegistry
from legal_ingestion.document_models import (
    DocumentInput,
    JobStatus,
    Priority,
    ProcessingJob,
    ProcessingProgress,
    ProcessingRecommendation,
    ProcessingResults,
    ProcessingStatus,
)
from legal_ingestion.errors import (
    DuplicateDocumentError,
    EmptyDocumentError,
    InvalidJobTransition,
    QueueBusyError,
)
from legal_ingestion.loaders import discover_files, load_folder
from legal_ingestion.processor import process_document

log = get_logger(__name__)

ProgressCallback = Callable[[ProcessingProgress], None]

_PRIORITY_RANK = {Priority.HIGH: 0, Priority.NORMAL: 1, Priority.LOW: 2}

_ALLOWED_TRANSITIONS = {
    JobStatus.PENDING: {JobStatus.PROCESSING},
    JobStatus.PROCESSING: {JobStatus.COMPLETED, JobStatus.FAILED},
    JobStatus.COMPLETED: set(),
    JobStatus.FAILED: set(),
}

DUPLICATE_REASON = "ملف مكرر"
GENERIC_ERROR_MESSAGE = "خطأ في معالجة الملف - يرجى المحاولة مرة أخرى"
# Checked in order; first isinstance match wins.
_USER_FACING_ERRORS = (
    (FileNotFoundError, "الملف غير موجود"),
    (PermissionError, "لا توجد صلاحية للوصول للملف"),
    (UnicodeDecodeError, "محتوى الملف غير صالح"),
    (EmptyDocumentError, "محتوى الملف فارغ أو أقصر من أن يقسم"),
)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def user_facing_error(error: BaseException) -> str:
    for error_type, friendly in _USER_FACING_ERRORS:
        if isinstance(error, error_type):
            return friendly
    return GENERIC_ERROR_MESSAGE


class DocumentProcessingManager:
    """
    Priority queue of documents processed strictly one at a time.

    The manager owns the dedup registry and the queue; nothing else should
    mutate either while a batch is running.
    """

    def __init__(
        self,
        registry: Optional[DedupRegistry] = None,
        progress_callback: Optional[ProgressCallback] = None,
        queue_config: Optional[QueueConfig] = None,
        chunking_config: Optional[ChunkingConfig] = None,
        show_progress: bool = False,
    ):
        self.registry = registry if registry is not None else DedupRegistry()
        self.progress_callback = progress_callback
        self.queue_config = queue_config or yaml_config.queue
        self.chunking_config = chunking_config or yaml_config.chunking
        self.show_progress = show_progress

        self._queue: List[ProcessingJob] = []
        self._finished: List[ProcessingJob] = []
        self._current: Optional[ProcessingJob] = None
        self._is_processing = False

    @property
    def is_processing(self) -> bool:
        return self._is_processing

    @property
    def pending_jobs(self) -> List[ProcessingJob]:
        return list(self._queue)

    @property
    def finished_jobs(self) -> List[ProcessingJob]:
        return list(self._finished)

    # --------------------
    # Queue management
    # --------------------
    def enqueue(self, documents: Iterable[DocumentInput]) -> List[str]:
        """Add documents as pending jobs and return their ids in input order."""
        job_ids: List[str] = []
        for doc in documents:
            job = ProcessingJob(
                id=f"job_{uuid.uuid4().hex[:12]}",
                input=doc,
                priority=Priority(doc.priority),
                created_at=_now(),
            )
            self._queue.append(job)
            job_ids.append(job.id)

        # list.sort is stable: FIFO within a priority band
        self._queue.sort(key=lambda j: _PRIORITY_RANK[j.priority])
        log.info("Queued %d job(s), %d pending", len(job_ids), len(self._queue))
        self._notify()
        return job_ids

    def clear_queue(self) -> None:
        if self._is_processing:
            raise QueueBusyError("Cannot clear the queue while it is being processed")
        dropped = len(self._queue)
        self._queue.clear()
        self._finished.clear()
        log.info("Cleared %d pending job(s)", dropped)
        self._notify()

    def load_existing_hashes(self, hashes: Iterable[str]) -> None:
        """Seed the registry with hashes from a previous session."""
        before = len(self.registry)
        self.registry.update(hashes)
        log.info("Loaded %d known hash(es)", len(self.registry) - before)

    def reset_processed_hashes(self) -> None:
        if self._is_processing:
            raise QueueBusyError("Cannot reset the registry while the queue is being processed")
        self.registry.clear()

    # --------------------
    # Processing
    # --------------------
    def run_queue(self) -> ProcessingResults:
        """
        Process every pending job in priority order and aggregate the outcome.

        A failing job is recorded and the loop moves on; duplicates are kept
        apart from other failures.
        """
        if self._is_processing:
            raise QueueBusyError("The queue is already being processed")

        self._is_processing = True
        self._finished.clear()
        results = ProcessingResults(start_time=_now())
        pbar = (
            tqdm(total=len(self._queue), desc="Processing documents", unit="doc")
            if self.show_progress
            else None
        )
        try:
            while self._queue:
                job = self._queue.pop(0)
                self._current = job
                self._transition(job, JobStatus.PROCESSING)
                job.started_at = _now()
                self._notify()

                self._run_job(job, results)

                job.completed_at = _now()
                self._finished.append(job)
                self._current = None
                results.total_processed += 1
                self._notify()
                if pbar is not None:
                    pbar.update(1)

                if self._queue and self.queue_config.inter_job_delay_seconds > 0:
                    time.sleep(self.queue_config.inter_job_delay_seconds)
        finally:
            self._is_processing = False
            self._current = None
            results.end_time = _now()
            if pbar is not None:
                pbar.close()

        log.info(
            "Batch done: %d ok, %d failed, %d duplicate(s)",
            len(results.successful),
            len(results.failed),
            len(results.duplicates),
        )
        return results

    def _run_job(self, job: ProcessingJob, results: ProcessingResults) -> None:
        name = job.input.file_name
        try:
            result = process_document(
                job.input.content,
                self.registry,
                ocr_confidence=job.input.ocr_confidence,
                cfg=self.chunking_config,
            )
        except DuplicateDocumentError as e:
            self._transition(job, JobStatus.FAILED)
            job.error = str(e)
            log.warning("Skipping duplicate %s (%s)", name, e.content_hash[:12])
            results.duplicates.append(
                {
                    "job_id": job.id,
                    "file_name": name,
                    "content_hash": e.content_hash,
                    "reason": DUPLICATE_REASON,
                }
            )
        except Exception as e:
            self._transition(job, JobStatus.FAILED)
            job.error = str(e)
            log.error("Failed to process %s: %s", name, e, exc_info=True)
            results.failed.append(
                {
                    "job_id": job.id,
                    "file_name": name,
                    "error": user_facing_error(e),
                    "original_error": job.error,
                }
            )
        else:
            self._transition(job, JobStatus.COMPLETED)
            job.result = result
            results.successful.append(
                {
                    "job_id": job.id,
                    "file_name": name,
                    "category": result.category.value,
                    "chunks_count": len(result.chunks),
                    "confidence": result.confidence,
                    "content_hash": result.content_hash,
                }
            )

    @staticmethod
    def _transition(job: ProcessingJob, target: JobStatus) -> None:
        if target not in _ALLOWED_TRANSITIONS[job.status]:
            raise InvalidJobTransition(job.id, job.status.value, target.value)
        job.status = target

    # --------------------
    # Status & progress
    # --------------------
    def status(self) -> ProcessingStatus:
        completed = sum(1 for j in self._finished if j.status == JobStatus.COMPLETED)
        failed = sum(1 for j in self._finished if j.status == JobStatus.FAILED)
        processing = 1 if self._current is not None else 0
        return ProcessingStatus(
            is_processing=self._is_processing,
            total_jobs=len(self._queue) + processing + len(self._finished),
            pending=len(self._queue),
            processing=processing,
            completed=completed,
            failed=failed,
            known_hashes=len(self.registry),
        )

    def progress(self) -> ProcessingProgress:
        status = self.status()
        done = status.completed + status.failed
        percentage = round(done / status.total_jobs * 100) if status.total_jobs else 0
        # fixed per-job constant, not measured
        remaining = (
            status.pending * self.queue_config.per_job_estimate_seconds
            if self._current is not None
            else None
        )
        return ProcessingProgress(
            status=status,
            percentage=percentage,
            estimated_seconds_remaining=remaining,
            current_job=self._current,
        )

    def _notify(self) -> None:
        if self.progress_callback is None:
            return
        # observer errors are logged, never propagated into the queue loop
        try:
            self.progress_callback(self.progress())
        except Exception:
            log.exception("Progress callback failed")

    def recommendations(self) -> List[ProcessingRecommendation]:
        """Advisory notes about the pending queue (size, payload, priority skew)."""
        recs: List[ProcessingRecommendation] = []
        cfg = self.queue_config
        if len(self._queue) > cfg.large_queue_jobs:
            recs.append(
                ProcessingRecommendation(
                    kind="performance",
                    message="Large number of files - consider processing in smaller batches",
                    severity="warning",
                )
            )
        payload = sum(len(j.input.content.encode("utf-8")) for j in self._queue)
        if payload > cfg.large_payload_bytes:
            recs.append(
                ProcessingRecommendation(
                    kind="memory",
                    message="Large total payload - processing may need extra memory",
                    severity="info",
                )
            )
        counts = Counter(j.priority for j in self._queue)
        if counts[Priority.HIGH] > counts[Priority.NORMAL] * 2:
            recs.append(
                ProcessingRecommendation(
                    kind="priority",
                    message="Many high-priority jobs - check the priority assignment",
                    severity="warning",
                )
            )
        return recs


def analyze_results(results: ProcessingResults) -> Dict[str, Any]:
    """Category counts, mean confidence and chunk-count spread of a batch."""
    ok = results.successful
    chunk_counts = [r["chunks_count"] for r in ok]
    return {
        "categories": dict(Counter(r["category"] for r in ok)),
        "average_confidence": mean(r["confidence"] for r in ok) if ok else 0.0,
        "chunks": {
            "min": min(chunk_counts, default=0),
            "max": max(chunk_counts, default=0),
            "average": mean(chunk_counts) if chunk_counts else 0.0,
            "total": sum(chunk_counts),
        },
        "errors": dict(Counter(r["error"] for r in results.failed)),
    }


def write_results(
    manager: DocumentProcessingManager, results: ProcessingResults, output_dir: Path
) -> Path:
    """
    Write the batch summary and one JSON file per processed document,
    grouped by category.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    summary = output_dir / "processing-summary.json"
    payload = {**results.to_dict(), "analysis": analyze_results(results)}
    summary.write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2))

    for job in manager.finished_jobs:
        if job.result is None:
            continue
        type_dir = output_dir / "processed" / job.result.category.value
        type_dir.mkdir(parents=True, exist_ok=True)
        # one file per document even when names repeat across folders
        stem = Path(job.input.file_name).stem
        out = type_dir / f"{stem}_{job.result.content_hash[:8]}_processed.json"
        out.write_bytes(orjson.dumps(job.result.to_dict(), option=orjson.OPT_INDENT_2))
    log.info("Wrote results to %s", output_dir)
    return summary


def ingest_folder(
    input_dir: Path | None = None,
    output_dir: Path | None = None,
    hash_store: Path | None = None,
    show_progress: bool = True,
) -> ProcessingResults:
    """
    Process every .txt/.md file under input_dir.
    - Loads known hashes from hash_store (resuming a previous session)
    - Queues files with a priority inferred from the file name
    - Runs the queue
    - Writes summary + per-document JSON and saves the updated hashes
    """
    input_dir = Path(input_dir or yaml_config.app.data_dir)
    output_dir = Path(output_dir or yaml_config.app.output_dir)
    hash_store = Path(hash_store or yaml_config.app.hash_store)

    files = discover_files(input_dir)
    log.info("Discovered %d files", len(files))

    manager = DocumentProcessingManager(
        registry=DedupRegistry.load(hash_store), show_progress=show_progress
    )
    manager.enqueue(load_folder(files))
    for rec in manager.recommendations():
        log.warning("%s: %s", rec.kind, rec.message)

    results = manager.run_queue()
    write_results(manager, results, output_dir)
    manager.registry.save(hash_store)
    return results
