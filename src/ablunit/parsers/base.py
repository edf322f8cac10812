from abc import ABC, abstractmethod

from ablunit.models import LocatedEntity
from ablunit.sink import DiscoverySink, EntityCollector


class BaseParser(ABC):
    """Abstract base class for language-specific test discovery parsers."""

    @abstractmethod
    def scan(self, source_code: str, file_path: str, sink: DiscoverySink) -> None:
        """Scan source code and report discovered test entities to a sink.

        Args:
            source_code: The source code to scan
            file_path: Relative path to the file (classification and labels)
            sink: Receives one callback per discovered entity
        """
        pass

    def extract_entities(self, source_code: str, file_path: str) -> list[LocatedEntity]:
        """Scan source code and return the discovered entities in report order."""
        collector = EntityCollector(file_path)
        self.scan(source_code, file_path, collector)
        return collector.entities
