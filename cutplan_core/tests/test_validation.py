import math

import pytest

from cutplan_core.errors import InvalidDimensionError, LayoutError, TargetTooLargeError
from cutplan_core.geometry import Size
from cutplan_core.validation import coerce_size, validate_dimensions


def test_validate_dimensions_accepts_valid_input():
    validate_dimensions(Size(79, 109), Size(22, 32), Size(2, 3))


def test_validate_dimensions_accepts_exact_fit():
    validate_dimensions(Size(26, 38), Size(22, 32), Size(2, 3))


@pytest.mark.parametrize("source", [Size(0, 10), Size(10, -1)])
def test_validate_dimensions_non_positive_source(source):
    with pytest.raises(InvalidDimensionError) as exc_info:
        validate_dimensions(source, Size(1, 1), Size(0, 0))
    assert "Source" in str(exc_info.value)


@pytest.mark.parametrize("target", [Size(0, 10), Size(5, -2)])
def test_validate_dimensions_non_positive_target(target):
    with pytest.raises(InvalidDimensionError) as exc_info:
        validate_dimensions(Size(20, 20), target, Size(0, 0))
    assert "Target" in str(exc_info.value)


def test_validate_dimensions_negative_margin():
    with pytest.raises(InvalidDimensionError) as exc_info:
        validate_dimensions(Size(20, 20), Size(5, 5), Size(0, -0.5))
    assert "Margin" in str(exc_info.value)


@pytest.mark.parametrize("bad_value", ["10", None, True, math.nan, math.inf])
def test_validate_dimensions_non_numeric(bad_value):
    with pytest.raises(InvalidDimensionError):
        validate_dimensions(Size(bad_value, 20), Size(5, 5), Size(0, 0))


def test_validate_dimensions_target_too_large_with_margin():
    with pytest.raises(TargetTooLargeError) as exc_info:
        validate_dimensions(Size(20, 20), Size(10, 10), Size(6, 0))
    assert "too large" in str(exc_info.value)


def test_validate_dimensions_reports_source_before_target():
    # both are invalid; the source check runs first
    with pytest.raises(InvalidDimensionError) as exc_info:
        validate_dimensions(Size(0, 0), Size(0, 0), Size(0, 0))
    assert "Source" in str(exc_info.value)


def test_layout_errors_are_value_errors():
    with pytest.raises(ValueError):
        validate_dimensions(Size(10, 10), Size(20, 20), Size(0, 0))
    assert issubclass(TargetTooLargeError, LayoutError)


def test_coerce_size_forms():
    assert coerce_size(Size(1, 2), 'source') == Size(1, 2)
    assert coerce_size((3, 4), 'source') == Size(3, 4)
    assert coerce_size([5, 6], 'source') == Size(5, 6)
    assert coerce_size({'width': 7, 'height': 8}, 'source') == Size(7, 8)


@pytest.mark.parametrize("value", [None, 5, (1, 2, 3), {'width': 1}])
def test_coerce_size_invalid(value):
    with pytest.raises(InvalidDimensionError) as exc_info:
        coerce_size(value, 'target')
    assert "target" in str(exc_info.value)
