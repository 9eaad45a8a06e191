"""Document store holding the current text and version of each open document."""

import logging
from threading import Lock
from typing import Dict, List, Optional

from vintlang.lsp.utils.models import Document

logger = logging.getLogger(__name__)


class DocumentStore:
    """
    In-memory store of open documents keyed by URI.

    Documents are replaced wholesale on every update; the store never patches
    text. No validation is performed on the content.
    """

    def __init__(self):
        self._documents: Dict[str, Document] = {}
        self._lock = Lock()

    def open(self, uri: str, text: str, version: int = 0) -> Document:
        document = Document(uri=uri, text=text, version=version)
        with self._lock:
            self._documents[uri] = document
        logger.debug(f"Opened document {uri} (version {version})")
        return document

    def update(self, uri: str, text: str, version: int = 0) -> Document:
        """Replace the text of a document; unknown URIs are opened."""
        document = Document(uri=uri, text=text, version=version)
        with self._lock:
            self._documents[uri] = document
        logger.debug(f"Updated document {uri} (version {version})")
        return document

    def close(self, uri: str) -> None:
        with self._lock:
            removed = self._documents.pop(uri, None)
        if removed is not None:
            logger.debug(f"Closed document {uri}")

    def get(self, uri: str) -> Optional[Document]:
        with self._lock:
            return self._documents.get(uri)

    def all(self) -> List[Document]:
        with self._lock:
            return list(self._documents.values())

    def __contains__(self, uri: str) -> bool:
        with self._lock:
            return uri in self._documents

    def __len__(self) -> int:
        with self._lock:
            return len(self._documents)
