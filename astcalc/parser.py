import logging
from dataclasses import dataclass
from typing import Callable, Optional

from astcalc.nodes import AssignOpKind, Assignment, AstNode, BinaryOp, Constant, OperatorKind, VariableRef
from astcalc.tokenizer import Scanner
from astcalc.utils import quoted

logger = logging.getLogger(__name__)

# Grammar, lowest binding first:
#
#   start    = identifier, ("=" | "+=" | "-=" | "*=" | "/="), term | term
#   term     = product, ("+" | "-"), term | product
#   product  = factor, ("*" | "/" | "^" | "&&" | "||"), product | factor
#   factor   = group | identifier | number
#   group    = "(", term, ")"
#
# term and product recurse on their right operand, so every binary operator
# is right-associative: 8 - 4 - 2 == 8 - (4 - 2).

ASSIGN_OPERATORS = [
    ("=", AssignOpKind.SET),
    ("+=", AssignOpKind.ADD_SET),
    ("-=", AssignOpKind.SUB_SET),
    ("*=", AssignOpKind.MUL_SET),
    ("/=", AssignOpKind.DIV_SET),
]

TERM_OPERATORS = [
    ("+", OperatorKind.ADD),
    ("-", OperatorKind.SUB),
]

PRODUCT_OPERATORS = [
    ("*", OperatorKind.MUL),
    ("/", OperatorKind.DIV),
    ("^", OperatorKind.POW),
    ("&&", OperatorKind.AND),
    ("||", OperatorKind.OR),
]


@dataclass
class ParseSuccess:
    tree: AstNode


@dataclass
class ParseFailure:
    code: str
    error_char_idx: int

    @property
    def remainder(self) -> str:
        return self.code[self.error_char_idx :]

    def __str__(self) -> str:
        print_start_idx = max(0, self.error_char_idx - 30)
        print_ellipsis_pre = print_start_idx > 0
        print_end_idx = min(len(self.code), self.error_char_idx + 30)
        print_ellipsis_post = print_end_idx < len(self.code)
        return "\n".join(
            [
                f"Unparseable: {quoted(self.remainder)}",
                (
                    ("..." if print_ellipsis_pre else "")
                    + self.code[print_start_idx:print_end_idx]
                    + ("..." if print_ellipsis_post else "")
                ),
                " " * (self.error_char_idx - print_start_idx + (3 if print_ellipsis_pre else 0)) + "^",
            ]
        )


ParseResult = ParseSuccess | ParseFailure


def parse(code: str) -> ParseResult:
    scanner = Scanner(code)
    tree = _consume_start(scanner)
    if tree is None:
        scanner.reset(0)
    if tree is None or not scanner.at_end():
        failure = ParseFailure(code=code, error_char_idx=scanner.skip_whitespace())
        logger.debug("Parse failed at column %d, remainder %r", failure.error_char_idx, failure.remainder)
        return failure
    return ParseSuccess(tree)


def _consume_start(scanner: Scanner) -> Optional[AstNode]:
    start = scanner.mark()
    name = scanner.identifier()
    if name is not None:
        after_name = scanner.mark()
        for literal, assign_op in ASSIGN_OPERATORS:
            if scanner.literal(literal) is not None:
                value = _consume_term(scanner)
                if value is not None:
                    return Assignment(operator=assign_op, name=name, value=value)
            scanner.reset(after_name)
    scanner.reset(start)
    return _consume_term(scanner)


def _consume_right_recursive(
    scanner: Scanner,
    consume_operand: Callable[[Scanner], Optional[AstNode]],
    operators: list[tuple[str, OperatorKind]],
) -> Optional[AstNode]:
    """Parse `operand (op operand)*` and fold it from the right.

    Equivalent to `rule = operand op rule | operand`: an operator is only
    consumed when an operand follows it, otherwise the scanner is rewound to
    just after the last operand.
    """
    first = consume_operand(scanner)
    if first is None:
        return None

    operands = [first]
    operator_kinds: list[OperatorKind] = []
    while True:
        after_operand = scanner.mark()
        for literal, operator_kind in operators:
            if scanner.literal(literal) is not None:
                right = consume_operand(scanner)
                if right is not None:
                    operator_kinds.append(operator_kind)
                    operands.append(right)
                    break
            scanner.reset(after_operand)
        else:
            break

    result = operands.pop()
    while operands:
        result = BinaryOp(operator=operator_kinds.pop(), left=operands.pop(), right=result)
    return result


def _consume_term(scanner: Scanner) -> Optional[AstNode]:
    return _consume_right_recursive(scanner, _consume_product, TERM_OPERATORS)


def _consume_product(scanner: Scanner) -> Optional[AstNode]:
    return _consume_right_recursive(scanner, _consume_factor, PRODUCT_OPERATORS)


def _consume_factor(scanner: Scanner) -> Optional[AstNode]:
    start = scanner.mark()
    if scanner.literal("(") is not None:
        inner = _consume_term(scanner)
        if inner is not None and scanner.literal(")") is not None:
            return inner
        scanner.reset(start)

    name = scanner.identifier()
    if name is not None:
        return VariableRef(name)

    number = scanner.number()
    if number is not None:
        return Constant(float(number))

    scanner.reset(start)
    return None
