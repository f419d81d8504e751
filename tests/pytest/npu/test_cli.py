import json

from npuops.cli.infer_type import main


def test_cli_default(capsys):
    assert main([]) == 0
    assert capsys.readouterr().out.strip() == "Tensor[(1, 4, 4, 8), int8]"


def test_cli_nhcwb16(capsys):
    argv = ["--ifm-shape", "1", "4", "4", "20", "--ofm-layout", "NHCWB16"]
    assert main(argv) == 0
    assert capsys.readouterr().out.strip() == "Tensor[(1, 4, 2, 4, 16), int8]"


def test_cli_failure(capsys):
    assert main(["--operator-type", "SQRT"]) == 1
    err = capsys.readouterr().err
    assert "ofm: Invalid operator" in err
    assert "but was SQRT" in err


def test_cli_attrs_json(capsys):
    assert main(["--ifm-dtype", "uint8", "--attrs-json"]) == 0
    out = capsys.readouterr().out
    attrs = json.loads(out[: out.rindex("}") + 1])
    assert attrs["operator_type"] == "ABS"
    assert attrs["ofm_channels"] == 8


def test_cli_describe(capsys):
    assert main(["--describe"]) == 0
    out = capsys.readouterr().out
    assert "operator: contrib.ethosu.unary_elementwise" in out
    assert "support level: 11" in out
    assert "ofm_layout [default: 'NHWC']" in out
