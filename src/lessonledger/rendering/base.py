"""Abstract invoice renderer."""

from abc import ABC, abstractmethod
from pathlib import Path

from lessonledger.domain.entities import InvoiceDocument


class InvoiceRenderer(ABC):
    """Turns an InvoiceDocument into a file."""

    @abstractmethod
    def render(self, document: InvoiceDocument, path: Path) -> None:
        """Write ``document`` to ``path``.

        Raises:
            DocumentRenderingFailed: If the document cannot be produced
        """
        pass
