"""Persisting rendered pages to the output directory."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .errors import ArtifactWriteError
from .models import ArtifactSet, RenderResult
from .utils import safe_name

logger = logging.getLogger("tor_snap.artifacts")

HTML_DIR = "htmls"
IMAGE_DIR = "images"
LINKS_DIR = "urls"


class ArtifactWriter:
    """Writes markup, screenshot and link list under ``output_root``."""

    def __init__(self, output_root: Path) -> None:
        self.output_root = Path(output_root)

    def ensure_dirs(self) -> None:
        for name in (HTML_DIR, IMAGE_DIR, LINKS_DIR):
            (self.output_root / name).mkdir(parents=True, exist_ok=True)

    def paths_for(self, destination: str) -> ArtifactSet:
        name = safe_name(destination)
        return ArtifactSet(
            html_path=self.output_root / HTML_DIR / f"{name}.html",
            image_path=self.output_root / IMAGE_DIR / f"{name}.png",
            links_path=self.output_root / LINKS_DIR / f"{name}_links.txt",
        )

    def write(self, destination: str, result: RenderResult) -> ArtifactSet:
        """Write all three artifacts for ``destination``.

        Every write is attempted even after one fails. Files that were written
        stay on disk; the first failure is raised as ArtifactWriteError.
        """
        artifacts = self.paths_for(destination)
        first_error: Optional[OSError] = None
        failed_path: Optional[Path] = None

        writes = (
            (artifacts.html_path, result.markup.encode("utf-8")),
            (artifacts.image_path, result.image),
            (artifacts.links_path, "\n".join(result.links).encode("utf-8")),
        )
        for path, data in writes:
            try:
                path.write_bytes(data)
            except OSError as exc:
                logger.warning("Failed to write %s: %s", path, exc)
                if first_error is None:
                    first_error, failed_path = exc, path

        if first_error is not None:
            raise ArtifactWriteError(str(first_error), path=failed_path) from first_error
        logger.debug("Saved artifacts for %s as %s", destination, artifacts.html_path.stem)
        return artifacts
