"""Recognition engine interfaces."""

from .abstract_engine import EmbeddingService, FaceProcessService, ProcessImageParams

__all__ = ["EmbeddingService", "FaceProcessService", "ProcessImageParams"]
