"""Application settings with environment-driven configuration.

Why: Single place that reads the environment; everything else gets settings injected.
"""

import os
from dataclasses import dataclass, field


@dataclass(frozen=True)
class AppSettings:
    """Application settings loaded from environment variables.

    This is the ONLY place where environment variables are read.
    """

    # ===== Embedding Configuration =====
    embed_base_url: str = field(
        default_factory=lambda: os.getenv("EMBED_BASE_URL", "https://api.deepseek.com/v1")
    )
    embed_api_key: str = field(default_factory=lambda: os.getenv("DS_API_KEY", ""))
    embed_model: str = field(
        default_factory=lambda: os.getenv("EMBED_MODEL", "deepseek-embedding-2")
    )
    embed_timeout_s: float = field(
        default_factory=lambda: float(os.getenv("EMBED_TIMEOUT_S", "30"))
    )
    embed_max_retries: int = field(
        default_factory=lambda: int(os.getenv("EMBED_MAX_RETRIES", "0"))
    )

    # ===== Retrieval Configuration =====
    sim_threshold: float = field(
        default_factory=lambda: float(os.getenv("SIM_THRESHOLD", "0.40"))
    )
    # Minimum cosine similarity for a card to be revealed

    top_k: int = field(default_factory=lambda: int(os.getenv("TOP_K", "1")))
    # Maximum cards revealed per question

    index_workers: int = field(default_factory=lambda: int(os.getenv("INDEX_WORKERS", "1")))
    # Parallel embedding calls while building the index (1 = sequential)

    # ===== Data / Serving =====
    cards_path: str = field(
        default_factory=lambda: os.getenv("CARDS_PATH", os.path.join("data", "case_cards.json"))
    )
    public_dir: str = field(default_factory=lambda: os.getenv("PUBLIC_DIR", "public"))
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8787")))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    # ===== Telemetry Configuration =====
    telemetry_enabled: bool = field(
        default_factory=lambda: os.getenv("TELEMETRY_ENABLED", "false").lower() == "true"
    )
    otlp_endpoint: str = field(default_factory=lambda: os.getenv("OTLP_ENDPOINT", ""))
    # Empty string = no OTLP export

    telemetry_environment: str = field(
        default_factory=lambda: os.getenv("TELEMETRY_ENVIRONMENT", "production")
    )
