#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The NPUOPS Project Authors
#
from .tensor import (
    TensorType,  # type: ignore
    Tensor,  # type: ignore
)
