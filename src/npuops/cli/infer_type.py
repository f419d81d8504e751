#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The NPUOPS Project Authors
#
import argparse
import json
import sys
import logging

import npuops.graphs.npu.op as O
from npuops.graphs.npu.attrs import (
    ATTRS_FIELDS,
    Activation,
    Layout,
    RoundingMode,
    UnaryOperatorType,
    attrs_gaps,
)
from npuops.graphs.npu.registry import get_op

logger = logging.getLogger(__name__)

OP_NAME = "contrib.ethosu.unary_elementwise"


def describe_op(name: str) -> str:
    entry = get_op(name)
    lines = [
        f"operator: {entry.name}",
        f"support level: {entry.support_level}",
        f"type relation: {entry.type_rel_name}",
        f"attributes type: {entry.attrs_type_key}",
        "arguments:",
    ]
    for arg in entry.arguments:
        lines.append(f"  - {arg.name} ({arg.type_key}): {arg.description}")
    lines.append("attributes:")
    for field in ATTRS_FIELDS:
        lines.append(f"  - {field.name} [default: {field.default!r}]: {field.description}")
    lines.append("")
    lines.append(entry.description)
    return "\n".join(lines)


def get_args_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Infer the output type of a NPU unary elementwise operator",
    )
    parser.add_argument(
        "--ifm-shape", type=int, nargs="+", default=[1, 4, 4, 8], help="ifm shape"
    )
    parser.add_argument("--ifm-dtype", type=str, default="int8", help="ifm data type")
    parser.add_argument(
        "--lut-shape", type=int, nargs="+", default=[256], help="look-up table shape"
    )
    parser.add_argument(
        "--operator-type",
        type=str,
        default=UnaryOperatorType.ABS.value,
        help="unary operator type",
    )
    parser.add_argument("--ifm-scale", type=float, default=1.0, help="ifm scale")
    parser.add_argument("--ifm-zero-point", type=int, default=0, help="ifm zero point")
    parser.add_argument("--ofm-scale", type=float, default=1.0, help="ofm scale")
    parser.add_argument("--ofm-zero-point", type=int, default=0, help="ofm zero point")
    parser.add_argument(
        "--ofm-channels",
        type=int,
        default=None,
        help="ofm channels, default to the NHWC ifm channels",
    )
    parser.add_argument(
        "--activation",
        type=str,
        default=Activation.NONE.value,
        choices=[act.value for act in Activation],
        help="activation function",
    )
    parser.add_argument("--clip-min", type=int, default=0, help="clip min value")
    parser.add_argument("--clip-max", type=int, default=0, help="clip max value")
    parser.add_argument(
        "--rounding-mode",
        type=str,
        default=RoundingMode.TFL.value,
        choices=[mode.value for mode in RoundingMode],
        help="rounding mode",
    )
    parser.add_argument(
        "--ifm-layout", type=str, default=Layout.NHWC.value, help="ifm layout"
    )
    parser.add_argument(
        "--ofm-layout", type=str, default=Layout.NHWC.value, help="ofm layout"
    )
    parser.add_argument(
        "--describe",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="print the operator registry entry and exit",
    )
    parser.add_argument(
        "--attrs-json",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="print the serialized attributes",
    )
    parser.add_argument(
        "--debug",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="debug mode",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = get_args_parser()
    args = parser.parse_args(argv)

    logging.basicConfig()
    if args.debug:
        logging.getLogger("npuops").setLevel(logging.DEBUG)

    if args.describe:
        print(describe_op(OP_NAME))
        return 0

    ofm_channels = args.ofm_channels
    if ofm_channels is None:
        if args.ifm_layout != Layout.NHWC.value:
            parser.error("--ofm-channels is required for a non NHWC ifm")
        ofm_channels = args.ifm_shape[-1]

    ifm = O.var("ifm", tuple(args.ifm_shape), args.ifm_dtype)
    lut = O.var("lut", tuple(args.lut_shape), args.ifm_dtype)
    node = O.unary_elementwise(
        ifm,
        lut,
        operator_type=args.operator_type,
        ifm_scale=args.ifm_scale,
        ifm_zero_point=args.ifm_zero_point,
        ofm_scale=args.ofm_scale,
        ofm_zero_point=args.ofm_zero_point,
        ofm_channels=ofm_channels,
        activation=args.activation,
        clip_min=args.clip_min,
        clip_max=args.clip_max,
        rounding_mode=args.rounding_mode,
        ifm_layout=args.ifm_layout,
        ofm_layout=args.ofm_layout,
        name="ofm",
    )
    for note in attrs_gaps(node.attrs, ifm.type.dtype):
        logger.warning("unchecked attribute: %s", note)

    if args.attrs_json:
        print(json.dumps(node.attrs.as_dict(), indent=2))

    result = node.type_check()
    if not result.succeeded:
        print(f"error: {result.error}", file=sys.stderr)
        return 1
    print(result.type)
    return 0


if __name__ == "__main__":
    sys.exit(main())
