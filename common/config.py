from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

_DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "config.yaml"


class AppConfig(BaseModel):
    data_dir: Path = Path("data/docs")
    output_dir: Path = Path("data/processed")
    hash_store: Path = Path("data/hashes.json")
    log_level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR)$")


class ChunkingConfig(BaseModel):
    min_chunk_chars: int = 30
    law_preamble_min_chars: int = 200
    decree_preamble_min_chars: int = 100
    attachment_preamble_min_chars: int = 200
    judicial_pack_chars: int = 1500
    oversized_fragment_chars: int = 2000
    generic_pack_chars: int = 1000
    sentence_pack_chars: int = 800


class ClassificationConfig(BaseModel):
    low_confidence_threshold: float = Field(default=0.3, ge=0.0, le=1.0)


class QueueConfig(BaseModel):
    per_job_estimate_seconds: float = 5.0
    inter_job_delay_seconds: float = 0.1
    large_queue_jobs: int = 100
    large_payload_bytes: int = 10 * 1024 * 1024


class GlobalYAMLConfig(BaseModel):
    app: AppConfig = Field(default_factory=AppConfig)
    chunking: ChunkingConfig = Field(default_factory=ChunkingConfig)
    classification: ClassificationConfig = Field(default_factory=ClassificationConfig)
    queue: QueueConfig = Field(default_factory=QueueConfig)


class EnvSettings(BaseSettings):
    config_path: Path = _DEFAULT_CONFIG_PATH
    log_level: str | None = None

    class Config:
        env_file = ".env"
        env_prefix = "LEGAL_INGEST_"


def load_yaml_config(path: Path = _DEFAULT_CONFIG_PATH) -> GlobalYAMLConfig:
    if not Path(path).exists():
        return GlobalYAMLConfig()
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    return GlobalYAMLConfig(**raw)


env_settings = EnvSettings()
yaml_config = load_yaml_config(env_settings.config_path)
if env_settings.log_level:
    yaml_config.app.log_level = env_settings.log_level.upper()
