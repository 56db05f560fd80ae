from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class DocumentCategory(str, Enum):
    # Declaration order is the classifier's tie-break order.
    LAWS = "laws"
    ROYAL_DECREES = "royal_decrees"
    REGULATIONS = "regulations"
    MINISTERIAL_DECISIONS = "ministerial_decisions"
    ROYAL_ORDERS = "royal_orders"
    FATWAS = "fatwas"
    JUDICIAL_PRINCIPLES = "judicial_principles"
    JUDICIAL_CRIMINAL = "judicial_criminal"
    JUDICIAL_CIVIL = "judicial_civil"
    INDEXES = "indexes"
    TEMPLATES = "templates"
    OTHERS = "others"


class JobStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class Priority(str, Enum):
    HIGH = "high"
    NORMAL = "normal"
    LOW = "low"


@dataclass(frozen=True)
class CategoryProfile:
    identifiers: Tuple[str, ...]  # strong signals, +1.0 each
    structure: Tuple[str, ...]  # structural markers, +0.5 each
    namespace: str
    required_fields: Tuple[str, ...]
    strategy: str  # segmentation strategy id

    @property
    def max_score(self) -> float:
        return len(self.identifiers) + 0.5 * len(self.structure)


@dataclass
class ClassificationResult:
    category: DocumentCategory
    confidence: float
    matched_patterns: List[str] = field(default_factory=list)


@dataclass
class Chunk:
    id: str
    category: DocumentCategory
    namespace: str
    content: str
    metadata: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.category.value,
            "namespace": self.namespace,
            "content": self.content,
            "metadata": self.metadata,
        }


@dataclass
class ProcessedDocument:
    category: DocumentCategory
    confidence: float
    chunks: List[Chunk]
    metadata: Dict[str, Any]
    content_hash: str
    notes: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category.value,
            "confidence": self.confidence,
            "chunks": [c.to_dict() for c in self.chunks],
            "metadata": self.metadata,
            "content_hash": self.content_hash,
            "notes": self.notes,
        }


@dataclass
class DocumentInput:
    file_name: str
    content: str
    ocr_confidence: Optional[float] = None
    priority: Priority = Priority.NORMAL


@dataclass
class ProcessingJob:
    id: str
    input: DocumentInput
    priority: Priority
    created_at: str
    status: JobStatus = JobStatus.PENDING
    started_at: Optional[str] = None
    completed_at: Optional[str] = None
    result: Optional[ProcessedDocument] = None
    error: Optional[str] = None


@dataclass
class ProcessingResults:
    start_time: str
    successful: List[Dict[str, Any]] = field(default_factory=list)
    failed: List[Dict[str, Any]] = field(default_factory=list)
    duplicates: List[Dict[str, Any]] = field(default_factory=list)
    total_processed: int = 0
    end_time: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "successful": self.successful,
            "failed": self.failed,
            "duplicates": self.duplicates,
            "total_processed": self.total_processed,
            "start_time": self.start_time,
            "end_time": self.end_time,
        }


@dataclass
class ProcessingStatus:
    is_processing: bool
    total_jobs: int
    pending: int
    processing: int
    completed: int
    failed: int
    known_hashes: int


@dataclass
class ProcessingProgress:
    status: ProcessingStatus
    percentage: int
    estimated_seconds_remaining: Optional[float]
    current_job: Optional[ProcessingJob] = None


@dataclass
class ProcessingRecommendation:
    kind: str  # "performance" | "memory" | "priority"
    message: str
    severity: str  # "info" | "warning"
