"""Abstract base class for styled document renderers."""

from abc import ABC, abstractmethod
from pathlib import Path

from styled_text.formatting.ir import StyledDocument


class DocumentRenderer(ABC):
    """Abstract base class for styled document renderers.

    Each renderer turns a StyledDocument into a string for one target
    and can write that string to a file.
    """

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension of rendered output (e.g., '.html')."""
        ...

    @abstractmethod
    def render(self, document: StyledDocument) -> str:
        """Render a styled document.

        Args:
            document: The StyledDocument produced by the compositor

        Returns:
            The rendered output
        """
        ...

    def write(self, document: StyledDocument, path: Path) -> None:
        """Render a document and write it to ``path`` as UTF-8."""
        path.write_text(self.render(document), encoding="utf-8")
