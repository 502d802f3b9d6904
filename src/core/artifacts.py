#!/usr/bin/env python3
"""
Delivery of rendered documents.

A rendered document is written to a transient file, opened in a browser
if one accepts it, otherwise copied to a download location under a fixed
name. The transient file is always released after a short delay, whichever
branch ran and whether or not it failed.
"""

import os
import shutil
import logging
import tempfile
import threading
import webbrowser
from enum import Enum
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, Optional

from .rendering import DOCUMENT_FILENAME, DOCUMENT_EXTENSION

logger = logging.getLogger(__name__)

DEFAULT_RELEASE_DELAY = 5.0


class Disposition(str, Enum):
    """How a document reached the user."""
    OPENED = "opened"
    DOWNLOADED = "downloaded"


@dataclass
class TransientArtifact:
    """Handle to a temporary on-disk copy of a document."""
    path: Path
    release_timer: Optional[threading.Timer] = None

    @property
    def uri(self) -> str:
        return self.path.resolve().as_uri()

    @property
    def released(self) -> bool:
        return not self.path.exists()

    def release(self) -> None:
        try:
            self.path.unlink()
            logger.debug(f"Released transient artifact {self.path}")
        except FileNotFoundError:
            pass


@dataclass
class DeliveryResult:
    disposition: Disposition
    location: str
    artifact: TransientArtifact


@contextmanager
def transient_artifact(document: str, release_delay: float = DEFAULT_RELEASE_DELAY) -> Iterator[TransientArtifact]:
    """
    Hold a document in a temporary file for the duration of the block.

    Release is scheduled on a timer when the block exits, on every path.
    """
    fd, name = tempfile.mkstemp(prefix="article-summary-", suffix=f".{DOCUMENT_EXTENSION}")
    with os.fdopen(fd, 'w', encoding='utf-8') as f:
        f.write(document)

    artifact = TransientArtifact(path=Path(name))
    logger.debug(f"Acquired transient artifact {artifact.path}")
    try:
        yield artifact
    finally:
        artifact.release_timer = threading.Timer(release_delay, artifact.release)
        artifact.release_timer.start()


def deliver_document(document: str,
                     open_in_browser: bool = True,
                     download_dir: Optional[Path] = None,
                     release_delay: float = DEFAULT_RELEASE_DELAY,
                     opener: Optional[Callable[[str], bool]] = None) -> DeliveryResult:
    """
    Show a rendered document: open it, or fall back to a download.

    Args:
        document: Rendered document
        open_in_browser: Try the browser first
        download_dir: Where the fallback copy is written (default: cwd)
        release_delay: Seconds before the transient file is removed
        opener: Callable taking a URI, returning False when refused

    Returns:
        DeliveryResult describing what happened
    """
    opener = opener or (lambda uri: webbrowser.open(uri, new=2))

    with transient_artifact(document, release_delay) as artifact:
        if open_in_browser:
            try:
                if opener(artifact.uri):
                    logger.info(f"Opened summary in browser ({artifact.uri})")
                    return DeliveryResult(Disposition.OPENED, artifact.uri, artifact)
                logger.info("Browser refused to open the summary, downloading instead")
            except webbrowser.Error as e:
                logger.warning(f"Error opening result: {e}")

        target = Path(download_dir or Path.cwd()) / DOCUMENT_FILENAME
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(artifact.path, target)
        logger.info(f"Saved summary to {target}")
        return DeliveryResult(Disposition.DOWNLOADED, str(target), artifact)
