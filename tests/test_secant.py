import pytest

from finmath_irr.finance.outcomes import (
    DivideByZero,
    InvalidSolverArgument,
    MaxDepthExceeded,
    NotANumber,
    NotARoot,
)
from finmath_irr.finance.polynomial import PresentValueFunction
from finmath_irr.finance.secant import secant


def cube_minus_two(x):
    return x ** 3 - 2.0


def test_secant_linear():
    assert secant(lambda x: 3.0 * x - 1.0, precision=1e-9) == pytest.approx(1 / 3, abs=1e-9)


def test_secant_cubic():
    root = secant(cube_minus_two, precision=1e-10, tolerance=1e-6)
    assert root == pytest.approx(2.0 ** (1 / 3), abs=1e-8)


def test_secant_returns_seed_that_is_a_root():
    assert secant(lambda x: x - 0.5, 0.5, 1.0, precision=1e-6) == 0.5
    assert secant(lambda x: x - 1.0, 0.5, 1.0, precision=1e-6) == 1.0


def test_secant_flat_function_divides_by_zero():
    with pytest.raises(DivideByZero):
        secant(lambda x: 7.0, precision=1e-6)


def test_secant_depth_cap():
    with pytest.raises(MaxDepthExceeded):
        secant(cube_minus_two, precision=1e-12, max_depth=1)


def test_secant_converged_step_that_is_not_a_root():
    # first step jumps 0.57, "converged" for precision=1, but f there is ~1.88
    with pytest.raises(NotARoot):
        secant(cube_minus_two, precision=1.0, tolerance=1e-9)


def test_secant_propagates_not_a_number_and_keeps_sign_history():
    f = PresentValueFunction({0.0: 705.57, 165 / 365.0: 563.43})
    with pytest.raises(NotANumber):
        secant(f, precision=1e-6)
    assert f.xpos == 0.5
    assert f.xneg is None


@pytest.mark.parametrize(
    "kwargs",
    [
        {"precision": 0.0},
        {"precision": -1e-3},
        {"precision": float("nan")},
        {"precision": 1e-6, "max_depth": 0},
        {"precision": 1e-6, "max_depth": True},
        {"precision": 1e-6, "p0": 1.0, "p1": 1.0},
        {"precision": 1e-6, "p0": float("inf")},
    ],
)
def test_secant_rejects_malformed_calls(kwargs):
    with pytest.raises(InvalidSolverArgument):
        secant(cube_minus_two, **kwargs)
