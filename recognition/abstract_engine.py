"""Interfaces of the external recognition collaborators."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass
class ProcessImageParams:
    """Marshalled recognition request.

    Exactly one of ``file`` (raw bytes from a multipart upload) or
    ``image_base64`` is set.
    """

    api_key: str
    file: bytes | None = None
    image_base64: str | None = None
    limit: int = 0
    det_prob_threshold: float | None = None
    face_plugins: str = ""
    status: bool = False
    additional_params: dict[str, object] = field(default_factory=dict)


class FaceProcessService(ABC):
    """Runs detection and recognition on an image."""

    @abstractmethod
    def process_image(self, params: ProcessImageParams) -> dict:
        """Return a JSON-serializable recognition result."""


class EmbeddingService(ABC):
    """Read access to embedding processing-time records."""

    @abstractmethod
    def list_embeddings_by_time(self, api_key: str, time: int) -> list[dict]:
        """Return records for ``api_key`` from the last ``time`` minutes."""
