#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The NPUOPS Project Authors
#
from typing import Any
import numpy as np
import numpy.typing

from npuops.graphs.npu.layout import BRICK_SIZE, num_channel_tiles


def np_init(shape: tuple, dtype: str) -> numpy.typing.NDArray[Any]:
    """
    Initialize and return a NP array filled
    with numbers in [1, 9].
    """
    vals = np.arange(int(np.prod(shape)))
    vals = vals % 9 + 1
    return vals.reshape(shape).astype(dtype)


def nhwc_to_nhcwb16(data: numpy.typing.NDArray[Any]) -> numpy.typing.NDArray[Any]:
    """
    Convert a NHWC feature map to NHCWB16.
    The last channel brick is padded with zeros.
    """
    n, h, w, c = data.shape
    tiles = num_channel_tiles(c)
    padded = np.pad(data, [(0, 0), (0, 0), (0, 0), (0, tiles * BRICK_SIZE - c)])
    return padded.reshape(n, h, w, tiles, BRICK_SIZE).transpose(0, 1, 3, 2, 4)


def nhcwb16_to_nhwc(
    data: numpy.typing.NDArray[Any], channels: int
) -> numpy.typing.NDArray[Any]:
    """
    Convert a NHCWB16 feature map to NHWC with the given
    number of channels, the padding channels are dropped.
    """
    n, h, tiles, w, brick = data.shape
    assert brick == BRICK_SIZE, f"unexpected brick size: {data.shape}"
    assert channels <= tiles * BRICK_SIZE, (
        f"not enough channel bricks for {channels} channels: {data.shape}"
    )
    nhwc = data.transpose(0, 1, 3, 2, 4).reshape(n, h, w, tiles * BRICK_SIZE)
    return nhwc[..., :channels]
