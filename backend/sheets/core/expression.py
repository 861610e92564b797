"""AST-based reference extraction and evaluation for cell formulas."""
import ast
from decimal import Context, Decimal, Inexact, InvalidOperation, DivisionByZero, Overflow, localcontext
from typing import Callable, Dict, Mapping, Union

from .errors import FormulaError

Operand = Union[Decimal, str]

ZERO = Decimal(0)

# Digits kept by exact arithmetic; results needing more are rejected, not rounded
EXACT_PRECISION = 1000
# Significant digits for results that cannot be exact (1/3, 2 ** 0.5)
ROUNDED_PRECISION = 28

EXACT_CONTEXT = Context(
    prec=EXACT_PRECISION,
    traps=[InvalidOperation, DivisionByZero, Overflow, Inexact],
)

TOO_COMPLEX = "Expression too complex"


def _round(value: Decimal, digits: Decimal = ZERO) -> Decimal:
    # Rounding discards digits on purpose
    with localcontext() as ctx:
        ctx.traps[Inexact] = False
        return round(value, int(digits))


def _inexact_allowed(op: Callable[[Decimal, Decimal], Decimal]) -> Callable[[Decimal, Decimal], Decimal]:
    """Try op exactly; if the result cannot be exact, round it to ROUNDED_PRECISION."""
    def apply(a: Decimal, b: Decimal) -> Decimal:
        try:
            return op(a, b)
        except Inexact:
            with localcontext(EXACT_CONTEXT) as ctx:
                ctx.prec = ROUNDED_PRECISION
                ctx.traps[Inexact] = False
                return op(a, b)
    return apply


# Callable names; not treated as cell references when used as calls
FUNCTIONS: Dict[str, Callable[..., Decimal]] = {
    "abs": abs,
    "min": min,
    "max": max,
    "round": _round,
}

_BINARY_OPS: Dict[type, Callable[[Decimal, Decimal], Decimal]] = {
    ast.Add: lambda a, b: a + b,
    ast.Sub: lambda a, b: a - b,
    ast.Mult: lambda a, b: a * b,
    ast.Div: _inexact_allowed(lambda a, b: a / b),
    ast.FloorDiv: lambda a, b: a // b,
    ast.Mod: lambda a, b: a % b,
    ast.Pow: _inexact_allowed(lambda a, b: a ** b),
    ast.BitXor: _inexact_allowed(lambda a, b: a ** b),  # spreadsheet-style '^'
}


def parse_expression(expression: str) -> ast.Expression:
    """Parse a formula body into an expression tree."""
    try:
        return ast.parse(expression.strip(), mode="eval")
    except SyntaxError as e:
        raise FormulaError(f"Invalid expression: {e.msg}")
    except (RecursionError, MemoryError):
        raise FormulaError(TOO_COMPLEX)


class ReferenceExtractor(ast.NodeVisitor):
    """Collect the identifiers a formula reads, in order of appearance."""

    def __init__(self):
        self.references: Dict[str, bool] = {}

    def visit_Name(self, node: ast.Name):
        self.references.setdefault(node.id, True)

    def visit_Call(self, node: ast.Call):
        # Skip the function name itself, but still look inside its arguments
        if not (isinstance(node.func, ast.Name) and node.func.id in FUNCTIONS):
            self.visit(node.func)
        for arg in node.args:
            self.visit(arg)
        for keyword in node.keywords:
            self.visit(keyword.value)


def extract_references(expression: str) -> Dict[str, bool]:
    """
    Extract the cell ids referenced by a formula body.

    Returns:
        Mapping of cell id to True, in order of first appearance

    Raises:
        FormulaError: If the expression does not parse or nests too deeply
    """
    extractor = ReferenceExtractor()
    tree = parse_expression(expression)
    try:
        extractor.visit(tree)
    except RecursionError:
        raise FormulaError(TOO_COMPLEX)
    return extractor.references


def to_operand(text: str) -> Operand:
    """Numeric-looking text becomes a Decimal, anything else stays text."""
    # Decimal() accepts digit separators, a cell showing "1_000" is text
    if "_" in text:
        return text
    try:
        number = Decimal(text.strip())
    except InvalidOperation:
        return text
    return number if number.is_finite() else text


def format_result(value: Operand) -> str:
    """
    Render an operand as a cell display string.

    Raises:
        FormulaError: If the value is infinite or NaN
    """
    if isinstance(value, str):
        return value
    if not value.is_finite():
        raise FormulaError(f"Result is not a finite number: {value}")
    if value == 0:
        return "0"
    with localcontext(EXACT_CONTEXT):
        return format(value.normalize(), "f")


class Evaluator:
    """Walks a parsed formula against a fixed scope of cell results."""

    def __init__(self, scope: Mapping[str, str]):
        self.scope = scope

    def evaluate(self, node: ast.AST) -> Operand:
        if isinstance(node, ast.Expression):
            return self.evaluate(node.body)
        if isinstance(node, ast.Constant):
            return self._constant(node.value)
        if isinstance(node, ast.Name):
            if node.id not in self.scope:
                return ZERO
            return to_operand(self.scope[node.id])
        if isinstance(node, ast.UnaryOp):
            return self._unary(node)
        if isinstance(node, ast.BinOp):
            return self._binary(node)
        if isinstance(node, ast.Call):
            return self._call(node)
        raise FormulaError(f"Unsupported syntax: {type(node).__name__}")

    def _constant(self, value) -> Operand:
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            raise FormulaError(f"Unsupported constant: {value!r}")
        if isinstance(value, str):
            return value
        number = Decimal(str(value))
        if not number.is_finite():
            raise FormulaError(f"Number out of range: {value!r}")
        return number

    def _unary(self, node: ast.UnaryOp) -> Operand:
        operand = self._numeric(self.evaluate(node.operand))
        if isinstance(node.op, ast.USub):
            return -operand
        if isinstance(node.op, ast.UAdd):
            return +operand
        raise FormulaError(f"Unsupported operator: {type(node.op).__name__}")

    def _binary(self, node: ast.BinOp) -> Operand:
        left = self.evaluate(node.left)
        right = self.evaluate(node.right)

        if isinstance(node.op, ast.Add) and (isinstance(left, str) or isinstance(right, str)):
            return format_result(left) + format_result(right)

        op = _BINARY_OPS.get(type(node.op))
        if op is None:
            raise FormulaError(f"Unsupported operator: {type(node.op).__name__}")
        return op(self._numeric(left), self._numeric(right))

    def _call(self, node: ast.Call) -> Operand:
        if not isinstance(node.func, ast.Name) or node.func.id not in FUNCTIONS:
            raise FormulaError("Unsupported function call")
        if node.keywords or not node.args:
            raise FormulaError(f"Invalid arguments for {node.func.id}()")
        args = [self._numeric(self.evaluate(arg)) for arg in node.args]
        try:
            return FUNCTIONS[node.func.id](*args)
        except TypeError as e:
            raise FormulaError(f"Invalid arguments for {node.func.id}(): {e}")

    @staticmethod
    def _numeric(value: Operand) -> Decimal:
        if isinstance(value, str):
            raise FormulaError(f"Expected a number, got {value!r}")
        return value


def evaluate(expression: str, scope: Mapping[str, str]) -> str:
    """
    Evaluate a formula body against a scope of cell results.

    Identifiers missing from the scope evaluate to 0. Arithmetic is exact up
    to EXACT_PRECISION digits; only division and powers whose result cannot
    be exact are rounded, to ROUNDED_PRECISION significant digits.

    Args:
        expression: Formula text without the leading '='
        scope: cell id -> current result string

    Returns:
        The formatted result string

    Raises:
        FormulaError: On syntax errors, unsupported constructs, arithmetic
            failures or expressions nested too deeply to walk
    """
    tree = parse_expression(expression)
    try:
        with localcontext(EXACT_CONTEXT):
            return format_result(Evaluator(scope).evaluate(tree))
    except ArithmeticError as e:
        raise FormulaError(f"Arithmetic error: {type(e).__name__}")
    except (RecursionError, MemoryError):
        raise FormulaError(TOO_COMPLEX)
