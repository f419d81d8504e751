#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The NPUOPS Project Authors
#
"""
Shape arithmetic between the NHWC and NHCWB16 feature map layouts.

NHWC shapes are (1, H, W, C). NHCWB16 shapes are (1, H, ceil(C / 16), W, 16),
the last channel brick being zero padded. The channel count can not be
recovered from a NHCWB16 shape, callers always pass it explicitly.
"""
from typing import TypeAlias

from .attrs import Layout

__all__ = [
    "BRICK_SIZE",
    "LAYOUT_RANKS",
    "num_channel_tiles",
    "to_nhwc_shape",
    "to_layout_shape",
    "infer_elementwise_output_shape",
]

ShapeType: TypeAlias = tuple[int, ...]

BRICK_SIZE = 16

LAYOUT_RANKS = {
    Layout.NHWC: 4,
    Layout.NHCWB16: 5,
}


def num_channel_tiles(channels: int) -> int:
    return (channels + BRICK_SIZE - 1) // BRICK_SIZE


def to_nhwc_shape(shape: ShapeType, layout: Layout, channels: int) -> ShapeType:
    """
    Return the NHWC shape of a feature map given in layout.
    The channel dimension is always the given channels, the one
    in shape is ignored.
    """
    if layout == Layout.NHWC:
        return (shape[0], shape[1], shape[2], channels)
    return (shape[0], shape[1], shape[3], channels)


def to_layout_shape(nhwc_shape: ShapeType, layout: Layout) -> ShapeType:
    """
    Return the shape in layout of a feature map given in NHWC.
    """
    if layout == Layout.NHWC:
        return tuple(nhwc_shape)
    n, h, w, c = nhwc_shape
    return (n, h, num_channel_tiles(c), w, BRICK_SIZE)


def infer_elementwise_output_shape(
    ifm_shape: ShapeType,
    ifm_layout: Layout | str,
    ofm_layout: Layout | str,
    ofm_channels: int,
) -> ShapeType:
    """
    Compute the output feature map shape of an elementwise operator.

    Batch and spatial dims come from the input feature map, the
    channels are the declared ofm_channels.
    """
    ifm_layout, ofm_layout = Layout(ifm_layout), Layout(ofm_layout)
    nhwc_shape = to_nhwc_shape(tuple(ifm_shape), ifm_layout, int(ofm_channels))
    return to_layout_shape(nhwc_shape, ofm_layout)
