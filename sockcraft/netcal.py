"""Integer arithmetic behind the calculator server."""

from __future__ import annotations

from sockcraft.log import LogLevel, logger
from sockcraft.protocol import Request, Response

DIVISION_BY_ZERO = 1


def _truncating_div(x: int, y: int) -> int:
    quotient = abs(x) // abs(y)
    return -quotient if (x < 0) != (y < 0) else quotient


def _truncating_rem(x: int, y: int) -> int:
    return x - y * _truncating_div(x, y)


class Calculator:
    """Evaluates ``+ - / %`` with integer division truncating toward zero."""

    def solve(self, request: Request) -> Response:
        """Compute the request; division by zero gives code 1, unknown operators 0/0."""
        x, y, oper = request.x, request.y, request.oper
        if oper == "+":
            response = Response(x + y, 0)
            logger.log(LogLevel.DEBUG, x, " ", y, " result: ", response.result, " success")
            return response
        if oper == "-":
            return Response(x - y, 0)
        if oper in ("/", "%"):
            if y == 0:
                return Response(0, DIVISION_BY_ZERO)
            if oper == "/":
                return Response(_truncating_div(x, y), 0)
            return Response(_truncating_rem(x, y), 0)
        return Response(0, 0)