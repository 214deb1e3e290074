#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
File capabilities used by the orchestrator.

FileReader turns a FileHandle into bytes; ArtifactSink takes a finished
Artifact and delivers it (writes it to disk, keeps it for an HTTP response,
...). The orchestrator never touches paths or UI primitives directly.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from config.logging_config import get_logger
from .models import Artifact, FileHandle

logger = get_logger(__name__)


class FileReader(ABC):
    """Reads the content behind a FileHandle"""

    @abstractmethod
    async def read_bytes(self, handle: FileHandle) -> bytes:
        pass


class ArtifactSink(ABC):
    """Receives finished artifacts"""

    @abstractmethod
    async def deliver(self, artifact: Artifact) -> None:
        pass


class InMemoryFileReader(FileReader):
    """FileHandle.source holds the bytes themselves (uploads)"""

    async def read_bytes(self, handle: FileHandle) -> bytes:
        if not isinstance(handle.source, (bytes, bytearray)):
            raise TypeError(f"No in-memory content for {handle.name}")
        return bytes(handle.source)


class LocalFileReader(FileReader):
    """FileHandle.source is a filesystem path"""

    async def read_bytes(self, handle: FileHandle) -> bytes:
        return Path(handle.source).read_bytes()


class MemorySink(ArtifactSink):
    """Keeps delivered artifacts, newest last"""

    def __init__(self):
        self.artifacts: List[Artifact] = []

    async def deliver(self, artifact: Artifact) -> None:
        self.artifacts.append(artifact)

    @property
    def last(self) -> Optional[Artifact]:
        return self.artifacts[-1] if self.artifacts else None


class DirectorySink(ArtifactSink):
    """Writes artifacts into an output directory"""

    def __init__(self, output_dir: Path):
        self.output_dir = Path(output_dir)
        self.written: List[Path] = []

    async def deliver(self, artifact: Artifact) -> None:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / artifact.name
        path.write_bytes(artifact.data)
        self.written.append(path)
        logger.info(f" Saved {artifact.name} ({artifact.size} bytes) to {self.output_dir}")
