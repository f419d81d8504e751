#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The NPUOPS Project Authors
#
"""Attributes of the NPU unary elementwise operator.

The attributes record stores the serialized string values as given by the
front end. Nothing is validated at construction time, the operator type
relation is the only place where a configuration can be rejected.
"""
from typing import Any, NamedTuple
from collections.abc import Mapping
from dataclasses import dataclass, fields
from enum import Enum

import numpy as np

__all__ = [
    "UnaryOperatorType",
    "Activation",
    "RoundingMode",
    "Layout",
    "QuantParams",
    "AttrField",
    "REQUIRED",
    "ATTRS_FIELDS",
    "ATTRS_TYPE_KEY",
    "UnaryElementwiseAttrs",
    "attrs_gaps",
]

ATTRS_TYPE_KEY = "relay.attrs.EthosuUnaryElementwiseAttrs"


class UnaryOperatorType(str, Enum):
    ABS = "ABS"


class Activation(str, Enum):
    NONE = "NONE"
    CLIP = "CLIP"
    TANH = "TANH"
    SIGMOID = "SIGMOID"
    LUT = "LUT"


class RoundingMode(str, Enum):
    TFL = "TFL"
    TRUNCATE = "TRUNCATE"
    NATURAL = "NATURAL"


class Layout(str, Enum):
    NHWC = "NHWC"
    NHCWB16 = "NHCWB16"


class QuantParams(NamedTuple):
    scale: float
    zero_point: int


class AttrField(NamedTuple):
    name: str
    default: Any
    description: str


class _Required:
    def __repr__(self) -> str:
        return "<required>"


REQUIRED: Any = _Required()

# Documentation and serialization table, runtime defaults live on the dataclass.
ATTRS_FIELDS: tuple[AttrField, ...] = (
    AttrField(
        "operator_type",
        REQUIRED,
        "The type of the unary elementwise operator. 'ABS'",
    ),
    AttrField(
        "ifm_scale",
        REQUIRED,
        "The quantization scale for the Input Feature Map tensor.",
    ),
    AttrField(
        "ifm_zero_point",
        REQUIRED,
        "The quantization zero point for the Input Feature Map tensor.",
    ),
    AttrField(
        "ofm_scale",
        REQUIRED,
        "The quantization scale for the Output Feature Map tensor.",
    ),
    AttrField(
        "ofm_zero_point",
        REQUIRED,
        "The quantization zero point for the Output Feature Map tensor.",
    ),
    AttrField("ofm_channels", REQUIRED, "The number of OFM channels."),
    AttrField(
        "activation",
        Activation.NONE.value,
        "The activation function to use. "
        "'NONE' - no activation function. "
        "'CLIP' - clip the output between clip_min and clip_max. "
        "'TANH' - tanh activation function. "
        "'SIGMOID' - sigmoid activation function. "
        "'LUT' - use a look-up table to perform the activation function.",
    ),
    AttrField(
        "clip_min", 0, "The minimum clipping value if activation = 'CLIP'."
    ),
    AttrField(
        "clip_max", 0, "The maximum clipping value if activation = 'CLIP'."
    ),
    AttrField(
        "rounding_mode",
        RoundingMode.TFL.value,
        "The rounding mode to apply to the Output Feature Map tensor. "
        "'TFL' - Tensorflow Lite rounding scheme. "
        "'TRUNCATE' - Truncate towards zero. "
        "'NATURAL' - Round to nearest value, with x.5 rounded up towards +infinity.",
    ),
    AttrField(
        "ifm_layout",
        Layout.NHWC.value,
        "The layout of the Input Feature Map tensor. Can be 'NHWC' or 'NHCWB16'.",
    ),
    AttrField(
        "ofm_layout",
        Layout.NHWC.value,
        "The layout of the Output Feature Map tensor. Can be 'NHWC' or 'NHCWB16'.",
    ),
)


@dataclass(frozen=True)
class UnaryElementwiseAttrs:
    operator_type: str
    ifm_scale: float
    ifm_zero_point: int
    ofm_scale: float
    ofm_zero_point: int
    ofm_channels: int
    activation: str = Activation.NONE.value
    clip_min: int = 0
    clip_max: int = 0
    rounding_mode: str = RoundingMode.TFL.value
    ifm_layout: str = Layout.NHWC.value
    ofm_layout: str = Layout.NHWC.value

    @property
    def ifm_quant(self) -> QuantParams:
        return QuantParams(self.ifm_scale, self.ifm_zero_point)

    @property
    def ofm_quant(self) -> QuantParams:
        return QuantParams(self.ofm_scale, self.ofm_zero_point)

    @property
    def activation_kind(self) -> Activation:
        return Activation(self.activation)

    @property
    def rounding_kind(self) -> RoundingMode:
        return RoundingMode(self.rounding_mode)

    def as_dict(self) -> dict[str, Any]:
        return {field.name: getattr(self, field.name) for field in ATTRS_FIELDS}

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "UnaryElementwiseAttrs":
        """Build attributes from serialized values.

        Missing optional fields take the table default, missing required
        fields and unknown keys raise KeyError.
        """
        known = {field.name: field for field in ATTRS_FIELDS}
        unknown = [key for key in values if key not in known]
        if unknown:
            raise KeyError(f"unknown attributes for {ATTRS_TYPE_KEY}: {unknown}")
        kwargs = {}
        for name, field in known.items():
            if name in values:
                kwargs[name] = values[name]
            elif field.default is REQUIRED:
                raise KeyError(f"missing required attribute: {name}")
            else:
                kwargs[name] = field.default
        return cls(**kwargs)

    def __str__(self) -> str:
        params = [f"{field.name}={getattr(self, field.name)}" for field in fields(self)]
        return ", ".join(params)


def attrs_gaps(attrs: UnaryElementwiseAttrs, ifm_dtype: str | None = None) -> list[str]:
    """
    Return notes for the attribute conditions that type inference
    does not check. An empty list means nothing suspicious was found.
    None of these conditions make a node fail type checking.
    """
    notes = []
    if attrs.activation == Activation.CLIP.value and attrs.clip_min > attrs.clip_max:
        notes.append(
            f"clip_min ({attrs.clip_min}) is greater than clip_max ({attrs.clip_max})"
        )
    for name in ("ifm_scale", "ofm_scale"):
        scale = getattr(attrs, name)
        if not scale > 0:
            notes.append(f"{name} is not strictly positive: {scale}")
    if ifm_dtype is not None and np.dtype(ifm_dtype).kind in "iu":
        info = np.iinfo(ifm_dtype)
        for name in ("ifm_zero_point", "ofm_zero_point"):
            zero_point = getattr(attrs, name)
            if not info.min <= zero_point <= info.max:
                notes.append(
                    f"{name} ({zero_point}) is outside the {ifm_dtype} range "
                    f"[{info.min}, {info.max}]"
                )
    return notes
