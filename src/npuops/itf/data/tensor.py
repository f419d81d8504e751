#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The NPUOPS Project Authors
#
from abc import ABC, abstractmethod
import numpy.typing


class TensorType(ABC):
    """An abstract representation of a tensor's type information.

    TensorType defines the shape and element type of a tensor flowing
    between graph nodes. It is the unit of information produced and
    consumed by operator type inference.
    """

    @property
    @abstractmethod
    def shape(self) -> tuple[int, ...]:
        """Returns the tensor's shape as a tuple of dimension sizes.

        Returns:
            The size of each dimension in the tensor
        """
        ...

    @property
    @abstractmethod
    def dtype(self) -> str:
        """Returns the tensor's element type name, for instance "int8".

        Returns:
            The underlying data type of the tensor elements
        """
        ...

    @property
    @abstractmethod
    def ndims(self) -> int:
        """Returns the number of dimensions in the tensor.

        Returns:
            The tensor's rank
        """
        ...


class Tensor(ABC):
    """An abstract representation of a constant multidimensional object.

    Constant tensors appear as node operands, for instance the look-up
    table of an activation function.
    """

    @property
    @abstractmethod
    def type(self) -> TensorType:
        """Returns the tensor's type information.

        Returns:
            The type descriptor containing shape and dtype information
        """
        ...

    @abstractmethod
    def numpy(self) -> numpy.typing.NDArray:
        """Convert the tensor to a numpy array.

        Returns:
            The tensor's data as a numpy array
        """
        ...
