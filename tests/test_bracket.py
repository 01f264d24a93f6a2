from finmath_irr.finance.bracket import find_bracket, probe_points
from finmath_irr.finance.polynomial import PresentValueFunction


def test_probe_points():
    assert probe_points(1) == (1.0, 0.0)
    assert probe_points(11) == (11.0, -0.5)


def test_find_bracket_returns_xneg_xpos():
    # f(x) = 100 - 250 x: positive at 0, negative at 1
    f = PresentValueFunction({0.0: 100.0, 1.0: -250.0})
    assert find_bracket(f) == (1.0, 0.0)


def test_find_bracket_reuses_existing_sign_history():
    f = PresentValueFunction({0.0: 100.0, 1.0: -250.0})
    f(0.1)
    f(0.9)
    before = f.evaluations
    assert find_bracket(f) == (0.9, 0.1)
    assert f.evaluations == before


def test_find_bracket_skips_undefined_points():
    # f(x) = 100 - 19 sqrt(x): negative probes are undefined, f(27) > 0 > f(28)
    f = PresentValueFunction({0.0: 100.0, 0.5: -19.0})
    assert find_bracket(f) == (28.0, 1.0)


def test_find_bracket_gives_up():
    f = PresentValueFunction({0.0: 705.57, 165 / 365.0: 563.43})
    assert find_bracket(f, attempts=1024) is None
    assert f.xneg is None
    assert f.xpos == 1.0
