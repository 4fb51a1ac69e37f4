from cutplan_core.formatting import build_layout_report, format_dimension, format_size, layout_title
from cutplan_core.geometry import Size
from cutplan_core.packer import calculate


def test_format_dimension_whole_numbers():
    assert format_dimension(79) == "79"
    assert format_dimension(79.0) == "79"


def test_format_dimension_fractional():
    assert format_dimension(79.5) == "79.5"
    assert format_dimension(0.25) == "0.25"


def test_format_size():
    assert format_size(Size(79, 109.5)) == "79x109.5"


def test_layout_title():
    result = calculate(Size(79, 109), Size(22, 32), Size(2, 3))
    assert layout_title(result, Size(22, 32)) == "Layout_Source_79x109_Target_22x32_Result_8"


def test_build_layout_report_counts():
    result = calculate(Size(65, 100), Size(43, 12), Size(1, 1))
    report = build_layout_report(result)
    assert "Main   : 7" in report
    assert "Remain : 2" in report
    assert "Total  : 9" in report
    assert "Main grid:   7 row(s) x 1 column(s)" in report
    assert "Remain grid: 2 row(s) x 1 column(s)" in report


def test_build_layout_report_without_remainder():
    result = calculate(Size(26, 38), Size(22, 32), Size(2, 3))
    report = build_layout_report(result)
    assert "Remain grid: none" in report
    assert "Total  : 1" in report
