#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The NPUOPS Project Authors
#
"""Type inference failures and the inference result value."""
from typing import Any
from dataclasses import dataclass

from npuops.itf.data import TensorType

__all__ = [
    "TypeInferenceError",
    "ArityMismatch",
    "IncompleteInputType",
    "UnsupportedVariant",
    "UnsupportedElementType",
    "UnsupportedLayout",
    "InvalidInputShape",
    "InvalidOfmChannels",
    "InferResult",
]


class TypeInferenceError(RuntimeError):
    """Raised when a node configuration is rejected by its type relation."""

    def __init__(self, message: str, span: str | None = None) -> None:
        self.message = message
        self.span = span
        super().__init__(self._format())

    def _format(self) -> str:
        if self.span is None:
            return self.message
        return f"{self.span}: {self.message}"

    def set_span(self, span: str) -> None:
        """Attach the node origin to this error."""
        self.span = span
        self.args = (self._format(),)


class ArityMismatch(TypeInferenceError):
    """Raised when the number of input types does not match the operator."""

    def __init__(self, op_name: str, expected: int, found: int) -> None:
        self.expected = expected
        self.found = found
        super().__init__(
            f"Invalid operator: expected {op_name} to have {expected} inputs "
            f"but was given {found}"
        )


class IncompleteInputType(TypeInferenceError):
    """Raised when an input type has not been resolved yet."""

    def __init__(
        self, op_name: str, index: int, cause: TypeInferenceError | None = None
    ) -> None:
        self.index = index
        self.cause = cause
        self.__cause__ = cause
        super().__init__(
            f"Invalid operator: {op_name} input {index} has no known tensor type"
        )


class UnsupportedVariant(TypeInferenceError):
    """Raised when the operator_type attribute is not supported."""

    def __init__(self, op_name: str, expected: str, found: Any) -> None:
        self.found = found
        super().__init__(
            f"Invalid operator: expected {op_name} {expected} for operator_type "
            f"but was {found}"
        )


class UnsupportedElementType(TypeInferenceError):
    """Raised when the input feature map data type is not supported."""

    def __init__(self, op_name: str, expected: str, found: str) -> None:
        self.found = found
        super().__init__(
            f"Invalid operator: expected {op_name} input data type "
            f"of {expected} but was {found}"
        )


class InvalidOfmChannels(TypeInferenceError):
    """Raised when the ofm_channels attribute is negative."""

    def __init__(self, op_name: str, found: int) -> None:
        self.found = found
        super().__init__(
            f"Invalid operator: expected {op_name} ofm_channels to be "
            f"non-negative but was {found}"
        )


class UnsupportedLayout(TypeInferenceError):
    """Raised when a layout attribute is neither NHWC nor NHCWB16."""

    def __init__(self, op_name: str, attr_name: str, found: Any) -> None:
        self.attr_name = attr_name
        self.found = found
        super().__init__(
            f"Invalid operator: expected {op_name} 'NHWC' or 'NHCWB16' "
            f"for {attr_name} but was {found}"
        )


class InvalidInputShape(TypeInferenceError):
    """Raised when the input feature map rank does not match its layout."""

    def __init__(self, op_name: str, shape: tuple[int, ...], layout: str) -> None:
        self.shape = shape
        self.layout = layout
        super().__init__(
            f"Invalid operator: {op_name} input feature map shape {shape} "
            f"is not a valid {layout} shape"
        )


@dataclass(frozen=True)
class InferResult:
    """Outcome of a type relation: exactly one of type or error is set."""

    type: TensorType | None = None
    error: TypeInferenceError | None = None

    def __post_init__(self) -> None:
        assert (self.type is None) != (self.error is None), (
            f"inference result must hold a type or an error: {self}"
        )

    @classmethod
    def ok(cls, type: TensorType) -> "InferResult":
        return cls(type=type)

    @classmethod
    def fail(cls, error: TypeInferenceError) -> "InferResult":
        return cls(error=error)

    @property
    def succeeded(self) -> bool:
        return self.error is None

    def with_span(self, span: str) -> "InferResult":
        """Attach span to the held error unless it already has one, returns self."""
        if self.error is not None and self.error.span is None:
            self.error.set_span(span)
        return self

    def unwrap(self) -> TensorType:
        if self.error is not None:
            raise self.error
        assert self.type is not None
        return self.type
