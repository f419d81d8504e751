#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The NPUOPS Project Authors
#
from typing_extensions import override
from collections.abc import Sequence
from typing import Any
import logging

from npuops.itf.operator import Operator
from npuops.itf.data import TensorType

from .attrs import UnaryElementwiseAttrs, UnaryOperatorType, Layout
from .data import NPUTensorType, SUPPORTED_DTYPES
from .diagnostics import (
    InferResult,
    ArityMismatch,
    IncompleteInputType,
    UnsupportedVariant,
    UnsupportedElementType,
    UnsupportedLayout,
    InvalidInputShape,
    InvalidOfmChannels,
)
from .layout import LAYOUT_RANKS, infer_elementwise_output_shape

__all__ = [
    "NPUOperator",
    "NPUOperUnaryElementwise",
]

logger = logging.getLogger(__name__)


class NPUOperator(Operator):
    def __init__(
        self,
        name: str,
        num_inputs: int,
        required_inputs: tuple[int, ...] | None = None,
    ) -> None:
        self._name = name
        self._num_inputs = num_inputs
        if required_inputs is None:
            required_inputs = tuple(range(num_inputs))
        self._required_inputs = required_inputs

    @property
    @override
    def name(self) -> str:
        return self._name

    @property
    @override
    def num_inputs(self) -> int:
        return self._num_inputs

    @override
    def infer(
        self, inputs_types: Sequence[TensorType | None], attrs: Any
    ) -> InferResult:
        if len(inputs_types) != self.num_inputs:
            return InferResult.fail(
                ArityMismatch(self.short_name, self.num_inputs, len(inputs_types))
            )
        for idx in self._required_inputs:
            if inputs_types[idx] is None:
                return InferResult.fail(IncompleteInputType(self.short_name, idx))
        return InferResult.ok(inputs_types[0])

    @override
    def forward_types(
        self, inputs_types: Sequence[TensorType | None], attrs: Any
    ) -> list[TensorType]:
        return [self.infer(inputs_types, attrs).unwrap()]

    @property
    def short_name(self) -> str:
        """Name used in diagnostics, e.g. ethosu_unary_elementwise."""
        namespace, _, base = self._name.rpartition(".")
        vendor = namespace.rpartition(".")[2]
        return f"{vendor}_{base}" if vendor else base

    @override
    def __str__(self) -> str:
        return self._name


class NPUOperUnaryElementwise(NPUOperator):
    """
    Quantized unary elementwise operator, inputs are the input feature
    map and the look-up table used when activation is 'LUT'.
    """

    SUPPORTED_OPERATORS = tuple(op.value for op in UnaryOperatorType)

    def __init__(self, name: str = "contrib.ethosu.unary_elementwise") -> None:
        super().__init__(name, num_inputs=2, required_inputs=(0,))

    @override
    def infer(
        self, inputs_types: Sequence[TensorType | None], attrs: Any
    ) -> InferResult:
        assert isinstance(attrs, UnaryElementwiseAttrs), (
            f"unexpected attributes for {self.name}: {type(attrs).__name__}"
        )
        # Arity and resolved ifm, the lut type may be unknown and is not checked
        result = super().infer(inputs_types, attrs)
        if not result.succeeded:
            return result
        ifm = inputs_types[0]
        assert ifm is not None

        if attrs.operator_type not in self.SUPPORTED_OPERATORS:
            expected = " ".join(f"'{op}'" for op in self.SUPPORTED_OPERATORS)
            return InferResult.fail(
                UnsupportedVariant(self.short_name, expected, attrs.operator_type)
            )

        if ifm.dtype not in SUPPORTED_DTYPES:
            expected = " or ".join(
                f"type({dtype})" for dtype in reversed(SUPPORTED_DTYPES)
            )
            return InferResult.fail(
                UnsupportedElementType(self.short_name, expected, ifm.dtype)
            )

        layouts = {}
        for attr_name in ("ifm_layout", "ofm_layout"):
            value = getattr(attrs, attr_name)
            try:
                layouts[attr_name] = Layout(value)
            except ValueError:
                return InferResult.fail(
                    UnsupportedLayout(self.short_name, attr_name, value)
                )
        ifm_layout, ofm_layout = layouts["ifm_layout"], layouts["ofm_layout"]
        if ifm.ndims != LAYOUT_RANKS[ifm_layout]:
            return InferResult.fail(
                InvalidInputShape(self.short_name, ifm.shape, ifm_layout.value)
            )

        if attrs.ofm_channels < 0:
            return InferResult.fail(
                InvalidOfmChannels(self.short_name, attrs.ofm_channels)
            )

        ofm_shape = infer_elementwise_output_shape(
            ifm.shape, ifm_layout, ofm_layout, attrs.ofm_channels
        )
        ofm_type = NPUTensorType(ofm_shape, ifm.dtype)
        logger.debug("%s: %s -> %s", self.name, ifm, ofm_type)
        return InferResult.ok(ofm_type)
