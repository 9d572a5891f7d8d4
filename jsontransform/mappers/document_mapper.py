"""
Concrete mapper: input document → destination-grouped output document.

Each field named by the map is resolved against the input document and
classified as a scalar (rendered as text) or a structured value (object
or array, passed through after re-validation). Field failures are
isolated: they are logged, recorded as diagnostics and rendered according
to the missing-value policy, and the run continues with the next field.
"""

import json
import uuid
from collections.abc import Mapping
from datetime import date, datetime, time
from typing import Any

from jsontransform.config import MissingValuePolicy
from jsontransform.core.exceptions import (
    MappingFieldException,
    MissingSourceFieldException,
    NestedValueValidationException,
    ValidationException,
)
from jsontransform.core.logging import bind_logger, get_logger
from jsontransform.mappers.base_mapper import BaseMapper
from jsontransform.mappers.map_interpreter import groups
from jsontransform.schemas import (
    FieldError,
    FieldSpec,
    GroupSpec,
    ResolvedValue,
    TransformResult,
    ValueKind,
)

logger = get_logger(__name__)

_ABSENT_VALUES: dict[str, Any] = {"empty": "", "null": None}


class DocumentMapper(BaseMapper[Mapping[str, Any], TransformResult]):
    """Remap input documents according to one map document."""

    def __init__(
        self,
        map_document: Any,
        missing_value_policy: MissingValuePolicy = "empty",
    ) -> None:
        """
        Raises:
            MalformedMapException: If ``map_document`` has the wrong shape.
        """
        if missing_value_policy not in ("empty", "null", "omit"):
            raise ValueError(f"Unknown missing value policy: {missing_value_policy!r}")
        self._groups: list[GroupSpec] = groups(map_document)
        self._missing_value_policy = missing_value_policy

    @property
    def group_specs(self) -> list[GroupSpec]:
        return list(self._groups)

    def map_record(self, source: Mapping[str, Any]) -> TransformResult:
        """
        Build the output document for one input document.

        Per-field failures never raise; they are returned in
        ``TransformResult.diagnostics``.

        Raises:
            ValidationException: If ``source`` is not a JSON object.
        """
        if not isinstance(source, Mapping):
            raise ValidationException(
                message="Input document must be a JSON object.",
                details={"actual_type": type(source).__name__},
            )

        log = bind_logger(logger, run_id=uuid.uuid4().hex)
        output: dict[str, dict[str, Any]] = {}
        diagnostics: list[FieldError] = []

        for group in self._groups:
            group_doc: dict[str, Any] = {}

            for spec in group.field_specs:
                try:
                    resolved = self._resolve(source, spec)
                except MappingFieldException as exc:
                    log.warning(
                        "Field resolution failed",
                        extra={
                            "group": group.name,
                            "field": spec.destination,
                            "source_field": spec.source,
                            "error_code": exc.error_code,
                            "reason": exc.reason,
                        },
                    )
                    diagnostics.append(FieldError.from_exception(group.name, spec, exc))
                    resolved = ResolvedValue.absent()

                if resolved.kind is ValueKind.ABSENT:
                    if self._missing_value_policy == "omit":
                        continue
                    group_doc[spec.destination] = _ABSENT_VALUES[self._missing_value_policy]
                else:
                    group_doc[spec.destination] = resolved.value

            output[group.name] = group_doc

        log.debug(
            "Document remapped",
            extra={"group_count": len(output), "diagnostic_count": len(diagnostics)},
        )
        return TransformResult(output=output, diagnostics=diagnostics)

    # ── Private helpers ───────────────────────────────────────────────

    def _resolve(self, source: Mapping[str, Any], spec: FieldSpec) -> ResolvedValue:
        """
        Look up ``spec.source`` and classify the value.

        Raises:
            MissingSourceFieldException:    Source field not in the document.
            NestedValueValidationException: Structured value is not valid JSON.
        """
        if spec.source not in source:
            raise MissingSourceFieldException(
                field_name=spec.destination, source_field=spec.source
            )

        value = source[spec.source]
        if isinstance(value, (Mapping, list, tuple)):
            return ResolvedValue.structured(self._revalidate(value, spec))
        return ResolvedValue.scalar(self._to_text(value))

    @staticmethod
    def _revalidate(value: Any, spec: FieldSpec) -> dict[str, Any] | list[Any]:
        """
        Round-trip a structured value through strict JSON.

        The result is a deep copy, so the output never aliases the input.
        """
        try:
            return json.loads(json.dumps(value, allow_nan=False))
        except (TypeError, ValueError) as exc:
            raise NestedValueValidationException(
                field_name=spec.destination,
                source_field=spec.source,
                reason=f"Nested value is not valid JSON: {exc}",
            ) from exc

    @staticmethod
    def _to_text(value: Any) -> str:
        """
        Render a scalar as text.

          - None          → ''
          - str           → unchanged
          - bool / number → JSON text ('true', '7', '2.5')
          - date/datetime → ISO-8601
          - anything else → str(value)
        """
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        if isinstance(value, (bool, int, float)):
            try:
                return json.dumps(value, allow_nan=False)
            except ValueError:
                # NaN / Infinity have no JSON form
                return str(value)
        if isinstance(value, (datetime, date, time)):
            return value.isoformat()
        return str(value)


def transform(
    input_document: Mapping[str, Any],
    map_document: Any,
    missing_value_policy: MissingValuePolicy = "empty",
) -> TransformResult:
    """
    Remap ``input_document`` into the groups described by ``map_document``.

    Neither argument is modified; the returned output is a new document.

    Raises:
        MalformedMapException: If the map document has the wrong shape.
        ValidationException:   If the input document is not a JSON object.
    """
    mapper = DocumentMapper(map_document, missing_value_policy=missing_value_policy)
    return mapper.map_record(input_document)
