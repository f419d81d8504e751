#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The NPUOPS Project Authors
#
from typing import Any
from enum import Enum
import operator

import numpy.typing

from .attrs import UnaryElementwiseAttrs
from .data import NPUTensor, NPUTensorType
from .node import NPUNode, NPUVar, OperandType

__all__ = [
    "var",
    "const",
    "unary_elementwise",
    "MAKE_FUNCTIONS",
]


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def var(name: str, shape: tuple[int, ...], dtype: str) -> NPUVar:
    return NPUVar(name, NPUTensorType(shape, dtype))


def const(data: numpy.typing.ArrayLike) -> NPUTensor:
    return NPUTensor(data)


def unary_elementwise(
    ifm: OperandType,
    lut: OperandType,
    operator_type: str,
    ifm_scale: float,
    ifm_zero_point: int,
    ofm_scale: float,
    ofm_zero_point: int,
    ofm_channels: int,
    activation: str = "NONE",
    clip_min: int = 0,
    clip_max: int = 0,
    rounding_mode: str = "TFL",
    ifm_layout: str = "NHWC",
    ofm_layout: str = "NHWC",
    name: str | None = None,
    span: str | None = None,
) -> NPUNode:
    """
    Build a NPU unary elementwise node.

    The attributes are recorded as given, the node is validated
    the first time it is type checked.
    """
    attrs = UnaryElementwiseAttrs(
        operator_type=_enum_value(operator_type),
        ifm_scale=float(ifm_scale),
        ifm_zero_point=int(ifm_zero_point),
        ofm_scale=float(ofm_scale),
        ofm_zero_point=int(ofm_zero_point),
        ofm_channels=operator.index(ofm_channels),
        activation=_enum_value(activation),
        clip_min=int(clip_min),
        clip_max=int(clip_max),
        rounding_mode=_enum_value(rounding_mode),
        ifm_layout=_enum_value(ifm_layout),
        ofm_layout=_enum_value(ofm_layout),
    )
    return NPUNode(
        "contrib.ethosu.unary_elementwise",
        (ifm, lut),
        attrs,
        name=name,
        span=span,
    )


MAKE_FUNCTIONS = {
    "relay.op._make.ethosu_unary_elementwise": unary_elementwise,
}
