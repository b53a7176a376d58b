"""
Enum Constant Evaluation

Computes enum member values the way the C# compiler does: implicit members
are previous + 1 (the first is 0), explicit members are constant expressions
that may reference other members of the same enum in any order, members of
other enums, and the ``MinValue``/``MaxValue`` limits of integral types.
"""

from collections.abc import Callable

from viewmodel_export.syntax.models import (
    EnumMemberSyntax,
    ExpressionKind,
    ExpressionSyntax,
    TypeDeclarationSyntax,
)

from .ambient import ENUM_RANGES, integral_keyword
from .diagnostics import (
    CIRCULAR_CONSTANT,
    CONSTANT_OVERFLOW,
    NOT_CONSTANT,
    Diagnostic,
    Severity,
)
from .models import EnumValue

# (target type text, member name) -> value, or None if not an enum member
MemberResolver = Callable[[str, str], int | None]

# Shift operands: width in bits and signedness after numeric promotion
SHIFT_WIDTHS: dict[str, tuple[int, bool]] = {
    "int": (32, True),
    "uint": (32, False),
    "long": (64, True),
    "ulong": (64, False),
}

# Literal type candidates by suffix, smallest first
LITERAL_TYPES: dict[str, tuple[str, ...]] = {
    "": ("int", "uint", "long", "ulong"),
    "u": ("uint", "ulong"),
    "l": ("long", "ulong"),
    "ul": ("ulong",),
}

LIMIT_MEMBERS = {"MinValue", "MaxValue"}


class _ConstantError(Exception):
    """Expression is not a valid constant; carries the diagnostic to report."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class _Poisoned(Exception):
    """Depends on a member that already failed (reported once, at the source)."""


def parse_integer_literal(text: str) -> int:
    """
    Parse a C# integer literal.

    Supports decimal, ``0x`` hex and ``0b`` binary forms, ``_`` digit
    separators and ``u``/``l`` suffixes in any case and order.

    Raises:
        ValueError: If the text is not an integer literal
    """
    literal = text.replace("_", "").lower().rstrip("ul")
    if literal.startswith("0x"):
        return int(literal[2:], 16)
    if literal.startswith("0b"):
        return int(literal[2:], 2)
    return int(literal, 10)


def _smallest_type(candidates: tuple[str, ...], value: int) -> str:
    for keyword in candidates:
        low, high = ENUM_RANGES[keyword]
        if low <= value <= high:
            return keyword
    return candidates[-1]


def literal_type(text: str, value: int) -> str:
    """C# type of an integer literal: the first of its suffix's candidates that holds the value"""
    suffix = ""
    for char in reversed(text.lower()):
        if char not in "ul":
            break
        suffix += char
    return _smallest_type(LITERAL_TYPES["ul" if len(suffix) > 1 else suffix], value)


class EnumConstantEvaluator:
    """
    Evaluates the member values of one enum declaration.

    Example:
        evaluator = EnumConstantEvaluator(declaration, "int", resolve_member)
        values = evaluator.evaluate()      # None if any member failed
        evaluator.diagnostics              # one entry per failing member
    """

    def __init__(
        self,
        declaration: TypeDeclarationSyntax,
        underlying: str = "int",
        resolve_member: MemberResolver | None = None,
    ):
        """
        Args:
            declaration: Enum declaration
            underlying: Underlying type keyword
            resolve_member: Looks up ``Other.Member`` for enums declared elsewhere
        """
        self._declaration = declaration
        self._underlying = underlying
        self._resolve_member = resolve_member
        self._members: tuple[EnumMemberSyntax, ...] = declaration.enum_members
        self._index = {member.name: i for i, member in enumerate(self._members)}
        self._values: dict[int, int] = {}
        self._failed: set[int] = set()
        self._visiting: set[int] = set()
        self.diagnostics: list[Diagnostic] = []

    def evaluate(self) -> tuple[EnumValue, ...] | None:
        """
        Evaluate every member.

        Returns:
            Ordered (name, value) pairs in declaration order, or None if any
            member could not be evaluated
        """
        for index in range(len(self._members)):
            try:
                self._value_of(index)
            except _Poisoned:
                continue

        if self._failed:
            return None

        low, high = ENUM_RANGES.get(self._underlying, ENUM_RANGES["int"])
        values = []
        for index, member in enumerate(self._members):
            value = self._values[index]
            if not low <= value <= high:
                self._report(
                    member,
                    CONSTANT_OVERFLOW,
                    f"Constant value '{value}' cannot be converted to a '{self._underlying}'",
                )
                continue
            values.append(EnumValue(name=member.name, value=value))

        if len(values) != len(self._members):
            return None
        return tuple(values)

    def value_of(self, name: str) -> int | None:
        """
        Value of one member, evaluating it (and what it depends on) on demand.

        Returns:
            The value, or None if the enum has no such member
        """
        index = self._index.get(name)
        if index is None:
            return None
        return self._value_of(index)

    # ============================================================
    # Member values
    # ============================================================

    def _value_of(self, index: int) -> int:
        if index in self._values:
            return self._values[index]
        if index in self._failed:
            raise _Poisoned()

        member = self._members[index]
        if index in self._visiting:
            self._fail(
                index,
                CIRCULAR_CONSTANT,
                f"The evaluation of the constant value for '{self._qualified(member)}' involves a circular definition",
            )

        self._visiting.add(index)
        try:
            if member.value is None:
                value = 0 if index == 0 else self._value_of(index - 1) + 1
            else:
                value = self._eval(member.value)
        except _ConstantError as e:
            self._visiting.discard(index)
            self._fail(index, e.code, e.message)
        except _Poisoned:
            self._visiting.discard(index)
            self._failed.add(index)
            raise
        self._visiting.discard(index)

        self._values[index] = value
        return value

    def _fail(self, index: int, code: str, message: str) -> None:
        if index not in self._failed:
            self._failed.add(index)
            self._report(self._members[index], code, message)
        raise _Poisoned()

    def _report(self, member: EnumMemberSyntax, code: str, message: str) -> None:
        self.diagnostics.append(
            Diagnostic(
                severity=Severity.ERROR,
                code=code,
                message=message,
                path=self._declaration.file_path,
                span=member.span,
            )
        )

    def _qualified(self, member: EnumMemberSyntax) -> str:
        return f"{self._declaration.name}.{member.name}"

    # ============================================================
    # Expressions
    # ============================================================

    def _eval(self, expr: ExpressionSyntax) -> int:
        kind = expr.kind

        if kind == ExpressionKind.LITERAL:
            if expr.name != "integer_literal":
                raise self._not_constant(expr)
            try:
                return parse_integer_literal(expr.text)
            except ValueError:
                raise self._not_constant(expr) from None

        if kind == ExpressionKind.NAME:
            return self._member_reference(expr.name, expr)

        if kind == ExpressionKind.MEMBER_ACCESS:
            return self._member_access(expr)

        if kind in (ExpressionKind.PARENTHESIZED, ExpressionKind.CAST):
            return self._eval(expr.operands[0])

        if kind == ExpressionKind.UNARY:
            operand = self._eval(expr.operands[0])
            if expr.operator == "-":
                return -operand
            if expr.operator == "+":
                return operand
            if expr.operator == "~":
                return self._complement(operand)
            raise self._not_constant(expr)

        if kind == ExpressionKind.BINARY:
            left = self._eval(expr.operands[0])
            right = self._eval(expr.operands[1])
            return self._binary(expr, left, right)

        raise self._not_constant(expr)

    def _member_reference(self, name: str, expr: ExpressionSyntax) -> int:
        index = self._index.get(name)
        if index is None:
            raise self._not_constant(expr)
        return self._value_of(index)

    def _member_access(self, expr: ExpressionSyntax) -> int:
        target = expr.operands[0].text
        if self._refers_to_self(target):
            return self._member_reference(expr.name, expr)

        limits = self._limits_of(target)
        if limits is not None and expr.name in LIMIT_MEMBERS:
            return limits[0] if expr.name == "MinValue" else limits[1]

        if self._resolve_member is not None:
            value = self._resolve_member(target, expr.name)
            if value is not None:
                return value
        raise self._not_constant(expr)

    def _refers_to_self(self, target: str) -> bool:
        # `EnumName.Member`, optionally qualified
        return target.rsplit(".", 1)[-1].strip() == self._declaration.name

    @staticmethod
    def _limits_of(target: str) -> tuple[int, int] | None:
        keyword = integral_keyword(target)
        return ENUM_RANGES[keyword] if keyword else None

    def _operand_type(self, expr: ExpressionSyntax, value: int) -> str:
        """Static type of an integral operand, before numeric promotion"""
        kind = expr.kind
        if kind == ExpressionKind.PARENTHESIZED:
            return self._operand_type(expr.operands[0], value)
        if kind == ExpressionKind.CAST and expr.cast_type is not None:
            keyword = integral_keyword(expr.cast_type.text)
            if keyword:
                return keyword
        if kind == ExpressionKind.LITERAL:
            return literal_type(expr.text, value)
        if kind == ExpressionKind.NAME:
            return self._underlying
        if kind == ExpressionKind.MEMBER_ACCESS:
            target = expr.operands[0].text
            if self._refers_to_self(target):
                return self._underlying
            if expr.name in LIMIT_MEMBERS and integral_keyword(target):
                return integral_keyword(target)
        return _smallest_type(LITERAL_TYPES[""], value)

    def _shift(self, expr: ExpressionSyntax, left: int, count: int) -> int:
        # Shifts are unchecked: the result wraps to the promoted operand width
        keyword = self._operand_type(expr.operands[0], left)
        bits, signed = SHIFT_WIDTHS.get(keyword, SHIFT_WIDTHS["int"])
        count &= bits - 1
        result = left << count if expr.operator == "<<" else left >> count
        result &= (1 << bits) - 1
        if signed and result >= 1 << (bits - 1):
            result -= 1 << bits
        return result

    def _binary(self, expr: ExpressionSyntax, left: int, right: int) -> int:
        op = expr.operator
        if op == "+":
            return left + right
        if op == "-":
            return left - right
        if op == "*":
            return left * right
        if op in ("/", "%"):
            if right == 0:
                raise _ConstantError(NOT_CONSTANT, f"Division by constant zero in '{expr.text}'")
            # C# truncates toward zero; the remainder takes the dividend's sign
            quotient = abs(left) // abs(right)
            if (left < 0) != (right < 0):
                quotient = -quotient
            return quotient if op == "/" else left - quotient * right
        if op in ("<<", ">>"):
            return self._shift(expr, left, right)
        if op == "&":
            return left & right
        if op == "|":
            return left | right
        if op == "^":
            return left ^ right
        raise self._not_constant(expr)

    def _complement(self, value: int) -> int:
        low, high = ENUM_RANGES.get(self._underlying, ENUM_RANGES["int"])
        if low == 0:
            # Unsigned: flip within the type's width
            return high - value
        return ~value

    def _not_constant(self, expr: ExpressionSyntax) -> _ConstantError:
        return _ConstantError(NOT_CONSTANT, f"The expression '{expr.text}' must be constant")
