from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from importlib import import_module
from typing import Any

from pbl_tutor.application.ports.embedding_port import EmbeddingPort
from pbl_tutor.domain.errors import EmbeddingError


def extract_embedding(payload: Any) -> list[float]:
    """Normalize an embeddings response to a plain vector.

    Providers differ: OpenAI-style ``data[0].embedding``, or a top-level
    ``embedding`` / ``vector`` field.
    """
    raw: Any = None
    if isinstance(payload, Mapping):
        data = payload.get("data")
        if isinstance(data, list) and data and isinstance(data[0], Mapping):
            raw = data[0].get("embedding")
        if not raw:
            raw = payload.get("embedding") or payload.get("vector")
    if not isinstance(raw, list) or not raw:
        raise EmbeddingError("Embedding response carries no vector")
    try:
        return [float(x) for x in raw]
    except (TypeError, ValueError) as ex:
        raise EmbeddingError(f"Embedding response malformed: {ex}") from ex


@dataclass
class OpenAIEmbeddingAdapter(EmbeddingPort):
    """Embeddings from any OpenAI-compatible ``/embeddings`` endpoint."""

    base_url: str = "https://api.deepseek.com/v1"
    api_key: str = "EMPTY"
    model: str = "deepseek-embedding-2"
    timeout_s: float = 30.0
    max_retries: int = 0  # retry policy belongs here, never in the use cases

    def __post_init__(self) -> None:
        # Defer import of OpenAI to embed() to avoid hard dependency in tests
        self._client: Any | None = None

    def _ensure_client(self) -> Any:
        if self._client is None:
            try:
                module = import_module("openai")
            except ImportError as ex:
                raise EmbeddingError("openai not installed.") from ex
            self._client = module.OpenAI(
                base_url=self.base_url,
                api_key=self.api_key or "EMPTY",
                timeout=self.timeout_s,
                max_retries=self.max_retries,
            )
        return self._client

    def embed(self, text: str) -> list[float]:
        client = self._ensure_client()
        try:
            httpx = import_module("httpx")
            # Raw request: providers disagree on the response shape
            resp: Any = client.post(
                "/embeddings",
                cast_to=httpx.Response,
                body={"input": text, "model": self.model},
            )
            payload = resp.json()
        except Exception as ex:  # noqa: BLE001
            # Translate external errors to domain-specific errors
            status = getattr(ex, "status_code", None)
            if status is not None:
                raise EmbeddingError(
                    f"Embedding API error {status}: {getattr(ex, 'message', ex)}",
                    status_code=status,
                ) from ex
            raise EmbeddingError(f"Embedding request failed: {ex}") from ex
        return extract_embedding(payload)
