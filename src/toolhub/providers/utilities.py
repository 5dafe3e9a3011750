"""Self-contained calculation tools.

These need no network, credentials or database, so this provider survives
into the reduced catalog tier. Parameters are declared name-keyed; the
catalog normalizer turns them into ordered lists.
"""

from __future__ import annotations

import ast
import math
import operator
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from toolhub.capabilities.catalog import ProviderContext

_BINARY_OPS: dict[type[ast.operator], Callable[[Any, Any], Any]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
    ast.Pow: operator.pow,
}

_UNARY_OPS: dict[type[ast.unaryop], Callable[[Any], Any]] = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}

_FUNCTIONS: dict[str, Callable[..., Any]] = {
    "abs": abs,
    "round": round,
    "min": min,
    "max": max,
    "sqrt": math.sqrt,
    "log": math.log,
    "ceil": math.ceil,
    "floor": math.floor,
}

_CONSTANTS: dict[str, float] = {"pi": math.pi, "e": math.e}

MAX_EXPONENT = 1000


def _eval_node(node: ast.AST) -> Any:
    if isinstance(node, ast.Expression):
        return _eval_node(node.body)
    if isinstance(node, ast.Constant) and isinstance(node.value, (int, float)) and not isinstance(node.value, bool):
        return node.value
    if isinstance(node, ast.BinOp) and type(node.op) in _BINARY_OPS:
        left, right = _eval_node(node.left), _eval_node(node.right)
        if isinstance(node.op, ast.Pow) and abs(right) > MAX_EXPONENT:
            raise ValueError(f"Exponent too large: {right}")
        return _BINARY_OPS[type(node.op)](left, right)
    if isinstance(node, ast.UnaryOp) and type(node.op) in _UNARY_OPS:
        return _UNARY_OPS[type(node.op)](_eval_node(node.operand))
    if isinstance(node, ast.Name) and node.id in _CONSTANTS:
        return _CONSTANTS[node.id]
    if (
        isinstance(node, ast.Call)
        and isinstance(node.func, ast.Name)
        and node.func.id in _FUNCTIONS
        and not node.keywords
    ):
        return _FUNCTIONS[node.func.id](*(_eval_node(arg) for arg in node.args))
    raise ValueError(f"Unsupported expression element: {type(node).__name__}")


def evaluate(expression: str) -> float | int:
    """Evaluate an arithmetic expression without exposing ``eval``.

    >>> evaluate("2+2*10")
    22
    """
    try:
        tree = ast.parse(expression.strip(), mode="eval")
    except SyntaxError as exc:
        raise ValueError(f"Invalid expression: {expression!r}") from exc
    return _eval_node(tree)


def _number(params: Mapping[str, Any], key: str, default: float | None = None) -> float:
    value = params.get(key, default)
    if value is None or value == "":
        raise ValueError(f"Missing required parameter: {key}")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Parameter '{key}' must be a number, got {value!r}") from exc


def calculator(params: dict[str, Any]) -> dict[str, Any]:
    expression = str(params.get("expression") or "")
    if not expression.strip():
        raise ValueError("Missing required parameter: expression")
    return {"expression": expression, "result": evaluate(expression)}


def gst_calc(params: dict[str, Any]) -> dict[str, Any]:
    amount = _number(params, "amount")
    rate = _number(params, "rate", 18)
    gst = round(amount * rate / 100, 2)
    return {
        "amount": amount,
        "rate": rate,
        "gst": gst,
        "cgst": round(gst / 2, 2),
        "sgst": round(gst / 2, 2),
        "total": round(amount + gst, 2),
    }


def emi_calc(params: dict[str, Any]) -> dict[str, Any]:
    principal = _number(params, "principal")
    annual_rate = _number(params, "rate")
    months = int(_number(params, "tenure"))
    if months <= 0:
        raise ValueError("tenure must be a positive number of months")

    monthly_rate = annual_rate / 12 / 100
    if monthly_rate == 0:
        emi = principal / months
    else:
        growth = (1 + monthly_rate) ** months
        emi = principal * monthly_rate * growth / (growth - 1)
    total = emi * months
    return {
        "emi": round(emi, 2),
        "total_payment": round(total, 2),
        "total_interest": round(total - principal, 2),
        "tenure_months": months,
    }


def sip_calc(params: dict[str, Any]) -> dict[str, Any]:
    monthly = _number(params, "monthly")
    annual_rate = _number(params, "rate")
    years = _number(params, "years")
    months = int(years * 12)
    if months <= 0:
        raise ValueError("years must be positive")

    monthly_rate = annual_rate / 12 / 100
    if monthly_rate == 0:
        maturity = monthly * months
    else:
        maturity = monthly * (((1 + monthly_rate) ** months - 1) / monthly_rate) * (1 + monthly_rate)
    invested = monthly * months
    return {
        "invested": round(invested, 2),
        "maturity_value": round(maturity, 2),
        "estimated_returns": round(maturity - invested, 2),
    }


class UtilitiesProvider:
    name = "utilities"
    requires_resources = False

    def setup(self, context: ProviderContext) -> Iterable[object]:
        return [
            {
                "name": "calculator",
                "description": "Evaluate mathematical expression",
                "parameters": {
                    "expression": {"type": "string", "description": "Math expression e.g. 2+2*10", "required": True},
                },
                "execute": calculator,
            },
            {
                "name": "gst_calc",
                "description": "Calculate GST on amount",
                "parameters": {
                    "amount": {"type": "number", "description": "Base amount", "required": True},
                    "rate": {"type": "number", "description": "GST rate (5/12/18/28)", "default": 18},
                },
                "execute": gst_calc,
            },
            {
                "name": "emi_calc",
                "description": "Calculate EMI for loan",
                "parameters": {
                    "principal": {"type": "number", "description": "Loan amount", "required": True},
                    "rate": {"type": "number", "description": "Annual interest rate %", "required": True},
                    "tenure": {"type": "number", "description": "Months", "required": True},
                },
                "execute": emi_calc,
            },
            {
                "name": "sip_calc",
                "description": "Calculate SIP returns",
                "parameters": {
                    "monthly": {"type": "number", "description": "Monthly investment", "required": True},
                    "rate": {"type": "number", "description": "Expected return % p.a.", "required": True},
                    "years": {"type": "number", "description": "Investment period years", "required": True},
                },
                "execute": sip_calc,
            },
        ]


PROVIDER = UtilitiesProvider()

__all__ = ["PROVIDER", "UtilitiesProvider", "calculator", "emi_calc", "evaluate", "gst_calc", "sip_calc"]
