#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The NPUOPS Project Authors
#
from typing_extensions import override
from typing import TypeAlias, Any
from dataclasses import dataclass
import numpy as np
import numpy.typing

from npuops.itf.data import Tensor, TensorType

__all__ = [
    "NPUTensorType",
    "NPUTensor",
    "SUPPORTED_DTYPES",
]

ShapeType: TypeAlias = tuple[int, ...]

SUPPORTED_DTYPES = ("int8", "uint8")


@dataclass(frozen=True)
class NPUTensorType(TensorType):
    _shape: ShapeType
    _dtype: str

    def __init__(self, shape: Any, dtype: Any) -> None:
        object.__setattr__(self, "_shape", tuple(int(dim) for dim in shape))
        object.__setattr__(self, "_dtype", str(np.dtype(dtype)))
        if any(dim < 0 for dim in self._shape):
            raise ValueError(f"negative dimension in tensor shape: {self._shape}")

    @property
    @override
    def shape(self) -> ShapeType:
        return self._shape

    @property
    @override
    def dtype(self) -> str:
        return self._dtype

    @property
    @override
    def ndims(self) -> int:
        return len(self._shape)

    @override
    def __str__(self) -> str:
        return f"Tensor[{self._shape}, {self._dtype}]"


class NPUTensor(Tensor):
    def __init__(self, data: numpy.typing.ArrayLike) -> None:
        self._data = np.asarray(data)
        self._type = NPUTensorType(self._data.shape, self._data.dtype)

    @property
    @override
    def type(self) -> NPUTensorType:
        return self._type

    @override
    def numpy(self) -> numpy.typing.NDArray:
        return self._data

    @override
    def __str__(self) -> str:
        return f"const({self._type})"
