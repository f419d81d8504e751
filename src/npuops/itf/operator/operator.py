#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The NPUOPS Project Authors
#
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any
from ..data.tensor import TensorType


class Operator(ABC):
    """An abstract representation of an operator family.

    An Operator defines the type relation of the nodes it is attached to:
    from the node input types and the node attributes it either infers the
    output types or rejects the configuration. An Operator holds no per
    node state, the same instance is shared by every node of the family.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Returns the unique registered name for this operator.

        Returns:
            The operator's namespaced name
        """
        ...

    @property
    @abstractmethod
    def num_inputs(self) -> int:
        """Returns the number of operands expected by this operator.

        Returns:
            The operator's input arity
        """
        ...

    @abstractmethod
    def infer(self, inputs_types: Sequence[TensorType | None], attrs: Any) -> Any:
        """Infers the output tensor type from the input tensor types.

        Failures are returned as values, this method does not raise
        on invalid configurations.

        Args:
            inputs_types: List of input tensor types, None when unresolved
            attrs: The node attributes

        Returns:
            An inference result holding either the output type or the failure
        """
        ...

    @abstractmethod
    def forward_types(
        self, inputs_types: Sequence[TensorType | None], attrs: Any
    ) -> Sequence[TensorType]:
        """Infers output tensor types from input tensor types.

        Args:
            inputs_types: List of input tensor types
            attrs: The node attributes

        Returns:
            List of inferred output tensor types

        Raises:
            TypeInferenceError: when the configuration is rejected
        """
        ...
