"""Callback interface the scanner reports discovered entities through."""

from abc import ABC, abstractmethod

from ablunit.models import LocatedEntity, Range


class DiscoverySink(ABC):
    """Receives located test entities while a file is being scanned."""

    @abstractmethod
    def on_test_suite(self, range: Range, suite_name: str) -> None:
        pass

    @abstractmethod
    def on_test_class(self, range: Range, class_name: str) -> None:
        pass

    @abstractmethod
    def on_test_program(self, range: Range, program_name: str) -> None:
        pass

    @abstractmethod
    def on_test_method(self, range: Range, class_name: str, method_name: str) -> None:
        pass

    @abstractmethod
    def on_test_procedure(self, range: Range, program_name: str, procedure_name: str) -> None:
        pass

    @abstractmethod
    def on_assert(self, range: Range, method_name: str) -> None:
        pass


class EntityCollector(DiscoverySink):
    """Sink that records every callback as a LocatedEntity, in call order.

    Args:
        path: Relative path stamped onto every collected entity
    """

    def __init__(self, path: str = ""):
        self.path = path
        self.entities: list[LocatedEntity] = []

    def _add(self, kind: str, range: Range, name: str, parent: str = "") -> None:
        self.entities.append(LocatedEntity(
            kind=kind,
            name=name,
            range=range,
            parent=parent,
            path=self.path
        ))

    def on_test_suite(self, range: Range, suite_name: str) -> None:
        self._add("suite", range, suite_name)

    def on_test_class(self, range: Range, class_name: str) -> None:
        self._add("class", range, class_name)

    def on_test_program(self, range: Range, program_name: str) -> None:
        self._add("program", range, program_name)

    def on_test_method(self, range: Range, class_name: str, method_name: str) -> None:
        self._add("method", range, method_name, parent=class_name)

    def on_test_procedure(self, range: Range, program_name: str, procedure_name: str) -> None:
        self._add("procedure", range, procedure_name, parent=program_name)

    def on_assert(self, range: Range, method_name: str) -> None:
        self._add("assert", range, "", parent=method_name)

    def by_kind(self, kind: str) -> list[LocatedEntity]:
        return [e for e in self.entities if e.kind == kind]
