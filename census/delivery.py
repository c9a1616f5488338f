"""
Artifact delivery.

A delivery takes a finished workbook buffer plus its file name and hands
it to the user: written to a directory, or collected in memory for the
HTTP API to stream back.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Union

logger = logging.getLogger(__name__)


def dedupe_filename(filename: str, taken) -> str:
    """
    Return ``filename`` or, if taken, the first free "name (n).ext" variant.

    Args:
        filename: Requested file name
        taken: Predicate returning True if a name is already in use
    """
    if not taken(filename):
        return filename
    stem, dot, ext = filename.rpartition('.')
    if not dot:
        stem, ext = filename, ''
    n = 1
    while True:
        candidate = f"{stem} ({n}).{ext}" if dot else f"{stem} ({n})"
        if not taken(candidate):
            return candidate
        n += 1


class ArtifactDelivery:
    """Base delivery. Subclasses implement deliver()."""

    def deliver(self, data: bytes, filename: str) -> str:
        """
        Deliver one artifact.

        Returns:
            Where the artifact ended up (path or final name)
        """
        raise NotImplementedError


class DirectoryDelivery(ArtifactDelivery):
    """
    Writes artifacts into a directory.

    Files in one batch share a name; later files get " (1)", " (2)", ...
    suffixes instead of overwriting.
    """

    def __init__(self, output_dir: Union[str, Path]):
        self.output_dir = Path(output_dir)

    def deliver(self, data: bytes, filename: str) -> str:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        name = dedupe_filename(filename, lambda n: (self.output_dir / n).exists())
        path = self.output_dir / name
        path.write_bytes(data)
        logger.info(f"Saved {path} ({len(data):,} bytes)")
        return str(path)


@dataclass
class DeliveredArtifact:
    filename: str
    data: bytes


class MemoryDelivery(ArtifactDelivery):
    """Collects artifacts in memory, deduplicating names the same way"""

    def __init__(self):
        self.artifacts: List[DeliveredArtifact] = []

    def deliver(self, data: bytes, filename: str) -> str:
        names = {a.filename for a in self.artifacts}
        name = dedupe_filename(filename, lambda n: n in names)
        self.artifacts.append(DeliveredArtifact(filename=name, data=data))
        return name

    def as_dict(self) -> Dict[str, bytes]:
        return {a.filename: a.data for a in self.artifacts}
