import numpy as np
import pytest

import npuops.graphs.npu.op as O
from npuops.graphs.npu.attrs import Activation, Layout, UnaryOperatorType
from npuops.graphs.npu.data import NPUTensorType
from npuops.graphs.npu.diagnostics import (
    IncompleteInputType,
    UnsupportedElementType,
    UnsupportedVariant,
)
from npuops.graphs.npu.operators import NPUOperUnaryElementwise

from npu_utils import abs_node


def test_builder_defaults():
    node = abs_node()
    assert node.op_name == "contrib.ethosu.unary_elementwise"
    assert len(node.args) == 2
    assert node.attrs.activation == "NONE"
    assert node.attrs.rounding_mode == "TFL"
    assert node.attrs.ifm_layout == "NHWC"
    assert node.attrs.ofm_layout == "NHWC"
    assert node.checked_type is None
    assert isinstance(node.operator, NPUOperUnaryElementwise)


def test_builder_enum_values():
    node = abs_node(
        operator_type=UnaryOperatorType.ABS,
        activation=Activation.CLIP,
        clip_min=-10,
        clip_max=10,
        ofm_layout=Layout.NHCWB16,
    )
    assert node.attrs.operator_type == "ABS"
    assert type(node.attrs.activation) is str
    assert node.attrs.ofm_layout == "NHCWB16"


def test_builder_numpy_channels():
    node = abs_node(ofm_channels=np.int64(8))
    assert type(node.attrs.ofm_channels) is int


def test_builder_does_not_validate():
    node = abs_node(operator_type="SQRT", dtype="int32")
    assert node.attrs.operator_type == "SQRT"
    assert node.checked_type is None


def test_type_check_fills_slot():
    node = abs_node(ofm_layout="NHCWB16")
    result = node.type_check()
    assert result.succeeded
    assert node.checked_type == NPUTensorType((1, 4, 1, 4, 16), "int8")


def test_type_check_idempotent():
    node = abs_node(shape=(1, 3, 5, 20), dtype="uint8", ofm_channels=20)
    first = node.type_check().type
    second = node.type_check().type
    assert first == second == node.checked_type


def test_type_check_failure_keeps_slot_unset():
    node = abs_node(operator_type="SQRT", name="bad_abs")
    result = node.type_check()
    assert isinstance(result.error, UnsupportedVariant)
    assert result.error.span == "bad_abs"
    assert str(result.error).startswith("bad_abs: Invalid operator")
    assert node.checked_type is None
    with pytest.raises(UnsupportedVariant):
        result.unwrap()


def test_span_is_origin():
    node = abs_node(dtype="int16", span="model.py:12")
    result = node.type_check()
    assert isinstance(result.error, UnsupportedElementType)
    assert result.error.span == "model.py:12"


def test_chained_nodes():
    ifm = O.var("ifm", (1, 4, 4, 20), "int8")
    lut = O.const(np.zeros((256,), dtype=np.int8))
    first = O.unary_elementwise(
        ifm, lut, "ABS", 1.0, 0, 1.0, 0, 20, ofm_layout="NHCWB16"
    )
    second = O.unary_elementwise(
        first, lut, "ABS", 1.0, 0, 1.0, 0, 20, ifm_layout="NHCWB16"
    )
    assert second.type_check().unwrap() == NPUTensorType((1, 4, 4, 20), "int8")
    assert first.checked_type == NPUTensorType((1, 4, 2, 4, 16), "int8")


def test_failed_operand_halts_propagation():
    ifm = O.var("ifm", (1, 4, 4, 8), "float32")
    lut = O.const(np.zeros((256,), dtype=np.int8))
    first = O.unary_elementwise(ifm, lut, "ABS", 1.0, 0, 1.0, 0, 8)
    second = O.unary_elementwise(first, lut, "ABS", 1.0, 0, 1.0, 0, 8)
    result = second.type_check()
    assert isinstance(result.error, IncompleteInputType)
    assert first.checked_type is None
    assert second.checked_type is None


def test_make_function_name():
    make = O.MAKE_FUNCTIONS["relay.op._make.ethosu_unary_elementwise"]
    assert make is O.unary_elementwise


def test_node_str():
    node = abs_node(name="ofm")
    text = str(node)
    assert text.startswith("ofm = contrib.ethosu.unary_elementwise(%ifm, const(")
    assert "operator_type=ABS" in text


def test_failed_lut_operand_is_not_checked():
    ifm = O.var("ifm", (1, 4, 4, 8), "int8")
    lut_src = O.var("lut_src", (256,), "float32")
    zeros = O.const(np.zeros((256,), dtype=np.int8))
    lut = O.unary_elementwise(lut_src, zeros, "ABS", 1.0, 0, 1.0, 0, 256)
    node = O.unary_elementwise(ifm, lut, "ABS", 1.0, 0, 1.0, 0, 8)
    result = node.type_check()
    assert lut.checked_type is None
    assert result.unwrap() == NPUTensorType((1, 4, 4, 8), "int8")


def test_failed_operand_error_is_chained():
    ifm = O.var("ifm", (1, 4, 4, 8), "float32")
    lut = O.const(np.zeros((256,), dtype=np.int8))
    first = O.unary_elementwise(ifm, lut, "ABS", 1.0, 0, 1.0, 0, 8, name="first")
    second = O.unary_elementwise(first, lut, "ABS", 1.0, 0, 1.0, 0, 8, name="second")
    error = second.type_check().error
    assert isinstance(error, IncompleteInputType)
    assert error.span == "second"
    assert isinstance(error.cause, UnsupportedElementType)
    assert error.cause.span == "first"
    with pytest.raises(IncompleteInputType) as excinfo:
        second.type_check().unwrap()
    assert isinstance(excinfo.value.__cause__, UnsupportedElementType)


def test_checked_operand_not_rechecked(monkeypatch):
    ifm = O.var("ifm", (1, 4, 4, 8), "int8")
    lut = O.const(np.zeros((256,), dtype=np.int8))
    first = O.unary_elementwise(ifm, lut, "ABS", 1.0, 0, 1.0, 0, 8)
    assert first.type_check().succeeded

    def fail_type_check():
        raise AssertionError("operand type checked again")

    monkeypatch.setattr(first, "type_check", fail_type_check)
    left = O.unary_elementwise(first, lut, "ABS", 1.0, 0, 1.0, 0, 8)
    right = O.unary_elementwise(first, lut, "ABS", 1.0, 0, 1.0, 0, 8)
    assert left.type_check().type == right.type_check().type == first.checked_type


def test_result_span_kept():
    node = abs_node(operator_type="SQRT", name="inner")
    result = node.type_check()
    assert result.with_span("outer") is result
    assert result.error.span == "inner"
