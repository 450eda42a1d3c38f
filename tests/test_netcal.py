import pytest

from sockcraft.netcal import DIVISION_BY_ZERO, Calculator
from sockcraft.protocol import Request, Response


@pytest.fixture
def calc():
    return Calculator()


def test_addition(calc):
    assert calc.solve(Request(2, 3, "+")) == Response(5, 0)


def test_subtraction_inverts_addition(calc):
    diff = calc.solve(Request(10, 4, "-")).result
    assert calc.solve(Request(diff, 4, "+")).result == 10


def test_division_truncates_toward_zero(calc):
    assert calc.solve(Request(-7, 2, "/")).result == -3
    assert calc.solve(Request(-7, 2, "%")).result == -1


@pytest.mark.parametrize("x,y", [(17, 5), (-17, 5), (17, -5), (-17, -5), (0, 3)])
def test_quotient_and_remainder_rebuild_dividend(calc, x, y):
    q = calc.solve(Request(x, y, "/")).result
    r = calc.solve(Request(x, y, "%")).result
    assert q * y + r == x
    assert abs(r) < abs(y)
    assert abs(q) == abs(x) // abs(y)


@pytest.mark.parametrize("oper", ["/", "%"])
def test_division_by_zero_sets_code(calc, oper):
    assert calc.solve(Request(9, 0, oper)) == Response(0, DIVISION_BY_ZERO)


def test_unknown_operator_gives_zero(calc):
    assert calc.solve(Request(9, 3, "^")) == Response(0, 0)