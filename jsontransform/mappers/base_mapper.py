"""
Abstract base mapper.

Every mapper implements ``map_record`` (single document) and ``map_many``
(batch). This enforces a consistent contract across mapping strategies.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Generic, TypeVar

SourceT = TypeVar("SourceT")
TargetT = TypeVar("TargetT")


class BaseMapper(ABC, Generic[SourceT, TargetT]):
    """Contract that every document mapper must fulfil."""

    @abstractmethod
    def map_record(self, source: SourceT) -> TargetT:
        """
        Transform a single source document into the target format.

        Raises:
            TransformationException: If the mapping cannot be completed.
        """
        ...

    def map_many(self, sources: Iterable[SourceT]) -> list[TargetT]:
        """
        Transform a batch of source documents, preserving their order.

        Each document is mapped independently of the others.
        """
        return [self.map_record(s) for s in sources]
