import dataclasses

import pytest

from npuops.graphs.npu.attrs import (
    ATTRS_FIELDS,
    ATTRS_TYPE_KEY,
    REQUIRED,
    Activation,
    QuantParams,
    RoundingMode,
    UnaryElementwiseAttrs,
    attrs_gaps,
)


def make_attrs(**kwargs):
    values = dict(
        operator_type="ABS",
        ifm_scale=0.5,
        ifm_zero_point=-3,
        ofm_scale=0.25,
        ofm_zero_point=7,
        ofm_channels=8,
    )
    values.update(kwargs)
    return UnaryElementwiseAttrs(**values)


def test_defaults():
    attrs = make_attrs()
    assert attrs.activation == "NONE"
    assert attrs.clip_min == 0 and attrs.clip_max == 0
    assert attrs.rounding_mode == "TFL"
    assert attrs.ifm_layout == "NHWC"
    assert attrs.ofm_layout == "NHWC"


def test_fields_table_matches_dataclass():
    table = {field.name: field for field in ATTRS_FIELDS}
    dc_fields = dataclasses.fields(UnaryElementwiseAttrs)
    assert [field.name for field in dc_fields] == list(table.keys())
    for dc_field in dc_fields:
        default = table[dc_field.name].default
        if default is REQUIRED:
            assert dc_field.default is dataclasses.MISSING
        else:
            assert dc_field.default == default


def test_immutable():
    attrs = make_attrs()
    with pytest.raises(dataclasses.FrozenInstanceError):
        attrs.ofm_channels = 16


def test_accessors():
    attrs = make_attrs(activation="CLIP", rounding_mode="NATURAL")
    assert attrs.ifm_quant == QuantParams(0.5, -3)
    assert attrs.ofm_quant == QuantParams(0.25, 7)
    assert attrs.activation_kind is Activation.CLIP
    assert attrs.rounding_kind is RoundingMode.NATURAL


def test_construction_does_not_validate():
    attrs = make_attrs(operator_type="SQRT", ifm_layout="NCHW", clip_min=5, clip_max=1)
    assert attrs.operator_type == "SQRT"
    assert attrs.ifm_layout == "NCHW"


def test_serialization():
    attrs = make_attrs(activation="LUT", ofm_layout="NHCWB16")
    values = attrs.as_dict()
    assert values["activation"] == "LUT"
    assert list(values.keys()) == [field.name for field in ATTRS_FIELDS]
    assert UnaryElementwiseAttrs.from_dict(values) == attrs


def test_from_dict_defaults_and_errors():
    values = make_attrs().as_dict()
    for name in ("activation", "clip_min", "clip_max", "rounding_mode"):
        del values[name]
    assert UnaryElementwiseAttrs.from_dict(values) == make_attrs()
    with pytest.raises(KeyError, match="unknown attributes"):
        UnaryElementwiseAttrs.from_dict({**values, "ofm_dtype": "int8"})
    del values["ofm_channels"]
    with pytest.raises(KeyError, match="ofm_channels"):
        UnaryElementwiseAttrs.from_dict(values)


def test_type_key():
    assert ATTRS_TYPE_KEY == "relay.attrs.EthosuUnaryElementwiseAttrs"


def test_gaps_empty():
    assert attrs_gaps(make_attrs(), "int8") == []


def test_gaps_reported():
    attrs = make_attrs(
        activation="CLIP",
        clip_min=10,
        clip_max=-10,
        ofm_scale=0.0,
        ofm_zero_point=300,
    )
    notes = attrs_gaps(attrs, "int8")
    assert len(notes) == 3
    assert any("clip_min" in note for note in notes)
    assert any("ofm_scale" in note for note in notes)
    assert any("ofm_zero_point" in note for note in notes)


def test_gaps_clip_only_for_clip_activation():
    attrs = make_attrs(clip_min=10, clip_max=-10)
    assert attrs_gaps(attrs) == []
