#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The NPUOPS Project Authors
#
from abc import ABC, abstractmethod
from typing import Any
from ..operator.operator import Operator
from ..data import TensorType


class Node(ABC):
    """An abstract representation of an operator call in a dataflow graph.

    A Node binds an Operator to ordered operands and to an immutable set of
    attributes. Its output type is unknown until the node is type checked,
    after which it stays fixed for the node lifetime.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Returns the name of this node.

        Returns:
            The node's identifier, used as its origin in diagnostics
        """
        ...

    @property
    @abstractmethod
    def op_name(self) -> str:
        """Returns the registered name of the node operator.

        Returns:
            The operator's namespaced name
        """
        ...

    @property
    @abstractmethod
    def operator(self) -> Operator:
        """Returns the operator that defines this node's type relation.

        Returns:
            The registered operator for op_name
        """
        ...

    @property
    @abstractmethod
    def attrs(self) -> Any:
        """Returns the immutable attributes of this node.

        Returns:
            The attributes record
        """
        ...

    @property
    @abstractmethod
    def checked_type(self) -> TensorType | None:
        """Returns the inferred output type, None until type checking succeeds.

        Returns:
            The output tensor type or None
        """
        ...

    @abstractmethod
    def type_check(self) -> Any:
        """Run the node type relation and record the output type on success.

        Returns:
            The inference result
        """
        ...
