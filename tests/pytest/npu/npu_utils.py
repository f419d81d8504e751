import numpy as np


def abs_node(
    shape=(1, 4, 4, 8),
    dtype="int8",
    operator_type="ABS",
    ofm_channels=8,
    ifm_layout="NHWC",
    ofm_layout="NHWC",
    **attrs,
):
    import npuops.graphs.npu.op as O

    ifm = O.var("ifm", shape, dtype)
    lut = O.const(np.zeros((256,), dtype=np.int8))
    return O.unary_elementwise(
        ifm,
        lut,
        operator_type=operator_type,
        ifm_scale=attrs.pop("ifm_scale", 1.0),
        ifm_zero_point=attrs.pop("ifm_zero_point", 0),
        ofm_scale=attrs.pop("ofm_scale", 1.0),
        ofm_zero_point=attrs.pop("ofm_zero_point", 0),
        ofm_channels=ofm_channels,
        ifm_layout=ifm_layout,
        ofm_layout=ofm_layout,
        **attrs,
    )
