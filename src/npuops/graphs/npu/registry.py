#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The NPUOPS Project Authors
#
from typing import Any, NamedTuple
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
import threading
import logging

from npuops.itf.data import TensorType

from .attrs import UnaryElementwiseAttrs, ATTRS_TYPE_KEY
from .diagnostics import InferResult
from .operators import NPUOperator, NPUOperUnaryElementwise

__all__ = [
    "OpArgument",
    "OpEntry",
    "build_registry",
    "init_registry",
    "get_op",
    "has_op",
    "list_ops",
]

logger = logging.getLogger(__name__)


class OpArgument(NamedTuple):
    name: str
    type_key: str
    description: str


@dataclass(frozen=True)
class OpEntry:
    name: str
    description: str
    arguments: tuple[OpArgument, ...]
    support_level: int
    attrs_type: type
    attrs_type_key: str
    type_rel_name: str
    operator: NPUOperator

    def __post_init__(self) -> None:
        assert len(self.arguments) == self.operator.num_inputs, (
            f"arguments mismatch for {self.name}: "
            f"{len(self.arguments)} != {self.operator.num_inputs}"
        )
        assert self.operator.name == self.name, (
            f"operator name mismatch: {self.operator.name} != {self.name}"
        )

    @property
    def num_inputs(self) -> int:
        return len(self.arguments)

    @property
    def input_roles(self) -> list[str]:
        return [arg.name for arg in self.arguments]

    def infer(
        self, inputs_types: Sequence[TensorType | None], attrs: Any
    ) -> InferResult:
        return self.operator.infer(inputs_types, attrs)


_UNARY_ELEMENTWISE_DOC = """\
Quantized unary elementwise operator for Arm(R) Ethos(TM)-U NPUs.

This operator corresponds to the hardware-implemented quantized
unary elementwise operation found on NPUs. It accepts either NHWC
or NHCWB16 format for the inputs data (input feature maps, or IFMs).

Reference: https://developer.arm.com/documentation/102420/0200/

- ifm: NHWC - (1, ifm_height, ifm_width, ifm_channels)
       NHCWB16 - (1, ifm_height, ifm_channels // 16, ifm_width, 16)
- ofm: (1, ofm_height, ofm_width, ofm_channels)
"""


def _unary_elementwise_entry() -> OpEntry:
    name = "contrib.ethosu.unary_elementwise"
    return OpEntry(
        name=name,
        description=_UNARY_ELEMENTWISE_DOC,
        arguments=(
            OpArgument("ifm", "Tensor", "The Input Feature Map tensor (IFM)."),
            OpArgument(
                "lut",
                "Tensor",
                "The look-up table values to use if activation = 'LUT'",
            ),
        ),
        support_level=11,
        attrs_type=UnaryElementwiseAttrs,
        attrs_type_key=ATTRS_TYPE_KEY,
        type_rel_name="EthosuUnaryElementwise",
        operator=NPUOperUnaryElementwise(name),
    )


def build_registry() -> Mapping[str, OpEntry]:
    """
    Build the operators registry in a fixed order and
    return it as a read-only mapping.
    """
    entries: dict[str, OpEntry] = {}
    for make_entry in (_unary_elementwise_entry,):
        entry = make_entry()
        if entry.name in entries:
            raise ValueError(f"operator {entry.name} is already registered")
        entries[entry.name] = entry
        logger.debug("registered operator %s", entry.name)
    return MappingProxyType(entries)


_REGISTRY: Mapping[str, OpEntry] | None = None
_REGISTRY_LOCK = threading.Lock()


def init_registry() -> Mapping[str, OpEntry]:
    """Populate the process wide registry, subsequent calls are no-ops."""
    global _REGISTRY
    with _REGISTRY_LOCK:
        if _REGISTRY is None:
            _REGISTRY = build_registry()
    return _REGISTRY


def _registry() -> Mapping[str, OpEntry]:
    assert _REGISTRY is not None, "operators registry is not initialized"
    return _REGISTRY


def get_op(name: str) -> OpEntry:
    entry = _registry().get(name)
    if entry is None:
        raise ValueError(f"operator {name} not registered in operators registry")
    return entry


def has_op(name: str) -> bool:
    return name in _registry()


def list_ops() -> list[str]:
    return list(_registry().keys())
