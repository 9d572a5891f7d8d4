from jsontransform.core.exceptions import (
    AppException,
    TransformationException,
    MalformedMapException,
    DuplicateDestinationFieldException,
    MappingFieldException,
    MissingSourceFieldException,
    NestedValueValidationException,
    ValidationException,
    NotFoundException,
)
from jsontransform.core.logging import setup_logging, get_logger, bind_logger

__all__ = [
    "AppException",
    "TransformationException",
    "MalformedMapException",
    "DuplicateDestinationFieldException",
    "MappingFieldException",
    "MissingSourceFieldException",
    "NestedValueValidationException",
    "ValidationException",
    "NotFoundException",
    "setup_logging",
    "get_logger",
    "bind_logger",
]
