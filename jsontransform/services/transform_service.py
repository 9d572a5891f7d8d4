"""
Transform service — orchestrates map selection → remap → response.

This is the primary business-logic layer, composing the map source and
the document mapper into the operations served by the API.
"""

import asyncio
from typing import Any

from jsontransform.config import MissingValuePolicy
from jsontransform.core.exceptions import NotFoundException, ValidationException
from jsontransform.core.logging import get_logger
from jsontransform.mappers.document_mapper import DocumentMapper
from jsontransform.schemas import GroupSpec, TransformResult
from jsontransform.schemas.output_schema import BatchTransformResponse, TransformResponse
from jsontransform.utils.helpers import count_fields

logger = get_logger(__name__)


class TransformService:
    """Remap input documents into destination groups and return them."""

    def __init__(
        self,
        default_map: dict[str, Any] | None = None,
        missing_value_policy: MissingValuePolicy = "empty",
        strict: bool = False,
        max_batch_size: int = 500,
    ) -> None:
        self._default_map = default_map
        self._missing_value_policy = missing_value_policy
        self._strict = strict
        self._max_batch_size = max_batch_size

    def default_groups(self) -> list[GroupSpec]:
        """
        Interpreted view of the default map.

        Raises:
            NotFoundException: No default map is configured.
        """
        if self._default_map is None:
            raise NotFoundException(
                message="No default map is configured.",
                details={"setting": "MAP_FILE"},
            )
        return self._build_mapper(self._default_map).group_specs

    def transform(
        self,
        document: dict[str, Any],
        map_document: dict[str, Any] | None = None,
        strict: bool | None = None,
    ) -> TransformResponse:
        """
        Remap one document.

        Args:
            document:     Input document.
            map_document: Map to apply; the default map when omitted.
            strict:       Escalate field errors to a failure. Defaults to
                          the STRICT_FIELD_ERRORS setting.

        Raises:
            MalformedMapException:   The map has the wrong shape.
            TransformationException: ``strict`` and a field failed.
            ValidationException:     No map given and no default configured.
        """
        mapper = self._build_mapper(self._select_map(map_document))
        result = mapper.map_record(document)

        if self._resolve_strict(strict):
            result.raise_for_diagnostics()

        logger.info(
            "Transform complete",
            extra={
                "group_count": len(result.output),
                "field_count": count_fields(result.output),
                "diagnostic_count": len(result.diagnostics),
            },
        )
        return self._to_response(result)

    async def transform_many(
        self,
        documents: list[dict[str, Any]],
        map_document: dict[str, Any] | None = None,
        strict: bool | None = None,
    ) -> BatchTransformResponse:
        """
        Remap a batch of documents with one map, preserving input order.

        The batch runs in a worker thread so the event loop stays free.

        Raises:
            ValidationException:     Batch larger than MAX_BATCH_SIZE, or no map.
            MalformedMapException:   The map has the wrong shape.
            TransformationException: ``strict`` and any field failed.
        """
        if len(documents) > self._max_batch_size:
            raise ValidationException(
                message=(
                    f"Batch of {len(documents)} documents exceeds the limit "
                    f"of {self._max_batch_size}."
                ),
                details={
                    "batch_size": len(documents),
                    "max_batch_size": self._max_batch_size,
                },
            )

        mapper = self._build_mapper(self._select_map(map_document))

        logger.info("Batch transform started", extra={"batch_size": len(documents)})
        results: list[TransformResult] = await asyncio.to_thread(
            mapper.map_many, documents
        )

        if self._resolve_strict(strict):
            for result in results:
                result.raise_for_diagnostics()

        responses = [self._to_response(r) for r in results]
        diagnostic_count = sum(len(r.diagnostics) for r in responses)

        logger.info(
            "Batch transform complete",
            extra={
                "batch_size": len(responses),
                "diagnostic_count": diagnostic_count,
            },
        )
        return BatchTransformResponse(
            status="ok",
            total_count=len(responses),
            results=responses,
            metadata={"diagnostic_count": diagnostic_count},
        )

    # ── Private helpers ───────────────────────────────────────────────

    def _select_map(self, map_document: dict[str, Any] | None) -> dict[str, Any]:
        if map_document is not None:
            return map_document
        if self._default_map is None:
            raise ValidationException(
                message="No map document supplied and no default map is configured.",
                details={"setting": "MAP_FILE"},
            )
        return self._default_map

    def _build_mapper(self, map_document: dict[str, Any]) -> DocumentMapper:
        return DocumentMapper(
            map_document, missing_value_policy=self._missing_value_policy
        )

    def _resolve_strict(self, strict: bool | None) -> bool:
        return self._strict if strict is None else strict

    @staticmethod
    def _to_response(result: TransformResult) -> TransformResponse:
        return TransformResponse(
            status="ok" if not result.has_errors else "partial",
            output=result.output,
            diagnostics=result.diagnostics,
            metadata={
                "group_count": len(result.output),
                "field_count": count_fields(result.output),
                "diagnostic_count": len(result.diagnostics),
            },
        )
