#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The NPUOPS Project Authors
#
from typing_extensions import override
from typing import Any, TypeAlias
import threading
import logging

from npuops.itf.graph import Node
from npuops.itf.data import TensorType

from .data import NPUTensor, NPUTensorType
from .diagnostics import InferResult, IncompleteInputType, TypeInferenceError
from .operators import NPUOperator
from .registry import get_op

__all__ = [
    "NPUVar",
    "NPUNode",
]

logger = logging.getLogger(__name__)


class NPUNodeCounter:
    def __init__(self) -> None:
        self._count = 0
        self._lock = threading.Lock()

    def get_idx(self) -> int:
        with self._lock:
            idx = self._count
            self._count += 1
        return idx


class NPUVar:
    """A typed graph input."""

    def __init__(self, name: str, type: NPUTensorType) -> None:
        self._name = name
        self._type = type

    @property
    def name(self) -> str:
        return self._name

    @property
    def type(self) -> NPUTensorType:
        return self._type

    @override
    def __str__(self) -> str:
        return f"%{self._name}: {self._type}"


OperandType: TypeAlias = "NPUVar | NPUTensor | NPUNode"
OperandResult: TypeAlias = tuple[TensorType | None, TypeInferenceError | None]


class NPUNode(Node):
    _counter = NPUNodeCounter()

    def __init__(
        self,
        op_name: str,
        args: tuple[OperandType, ...],
        attrs: Any,
        name: str | None = None,
        span: str | None = None,
    ) -> None:
        self._op_name = op_name
        self._args = tuple(args)
        self._attrs = attrs
        self._idx = self._counter.get_idx()
        self._name = f"%{self._idx}" if name is None else name
        self._span = self._name if span is None else span
        self._checked_type: TensorType | None = None
        self._lock = threading.Lock()

    @property
    @override
    def name(self) -> str:
        return self._name

    @property
    @override
    def op_name(self) -> str:
        return self._op_name

    @property
    @override
    def operator(self) -> NPUOperator:
        return get_op(self._op_name).operator

    @property
    @override
    def attrs(self) -> Any:
        return self._attrs

    @property
    def args(self) -> tuple[OperandType, ...]:
        return self._args

    @property
    def span(self) -> str:
        return self._span

    @property
    @override
    def checked_type(self) -> TensorType | None:
        return self._checked_type

    def inputs_results(self) -> list[OperandResult]:
        """
        Return the operand types with the operand failures, operand nodes
        not yet checked are type checked first. An operand node that fails
        type checking gives a None type and its error.
        """
        results: list[OperandResult] = []
        for arg in self._args:
            if not isinstance(arg, NPUNode):
                results.append((arg.type, None))
            elif arg.checked_type is not None:
                results.append((arg.checked_type, None))
            else:
                arg_result = arg.type_check()
                results.append((arg_result.type, arg_result.error))
        return results

    def inputs_types(self) -> list[TensorType | None]:
        return [type for type, _ in self.inputs_results()]

    @override
    def type_check(self) -> InferResult:
        entry = get_op(self._op_name)
        operands = self.inputs_results()
        result = entry.infer([type for type, _ in operands], self._attrs)
        error = result.error
        if isinstance(error, IncompleteInputType) and error.cause is None:
            error.cause = error.__cause__ = operands[error.index][1]
        result = result.with_span(self._span)
        if not result.succeeded:
            logger.debug("type check failed for %s: %s", self._name, result.error)
            return result
        with self._lock:
            if self._checked_type is None:
                self._checked_type = result.type
            elif self._checked_type != result.type:
                raise RuntimeError(
                    f"type of node {self._name} changed: "
                    f"{self._checked_type} != {result.type}"
                )
        return result

    def _arg_str(self, arg: OperandType) -> str:
        if isinstance(arg, NPUVar):
            return f"%{arg.name}"
        if isinstance(arg, NPUNode):
            return arg.name
        return str(arg)

    @override
    def __str__(self) -> str:
        params = [self._arg_str(arg) for arg in self._args]
        params += [
            f"{attr}={value}" for attr, value in self._attrs.as_dict().items()
        ]
        return f"{self._name} = {self._op_name}({', '.join(params)})"
