import enum
import logging
import operator
from dataclasses import dataclass

from astcalc.arithmetic import BinaryOperationImpl, ieee_div, ieee_pow, logical_and, logical_or
from astcalc.store import VariableStore
from astcalc.utils import PrintableEnum

logger = logging.getLogger(__name__)


@dataclass
class CalcRuntimeError(Exception):
    errmsg: str

    def __str__(self) -> str:
        return self.errmsg


class OperatorKind(PrintableEnum):
    ADD = enum.auto()
    SUB = enum.auto()
    MUL = enum.auto()
    DIV = enum.auto()
    POW = enum.auto()
    AND = enum.auto()
    OR = enum.auto()


class AssignOpKind(PrintableEnum):
    SET = enum.auto()
    ADD_SET = enum.auto()
    SUB_SET = enum.auto()
    MUL_SET = enum.auto()
    DIV_SET = enum.auto()


BINARY_OPERATIONS: dict[OperatorKind, BinaryOperationImpl] = {
    OperatorKind.ADD: operator.add,
    OperatorKind.SUB: operator.sub,
    OperatorKind.MUL: operator.mul,
    OperatorKind.DIV: ieee_div,
    OperatorKind.POW: ieee_pow,
    OperatorKind.AND: logical_and,
    OperatorKind.OR: logical_or,
}

# (old value, assigned value) -> new value
ASSIGN_OPERATIONS: dict[AssignOpKind, BinaryOperationImpl] = {
    AssignOpKind.SET: lambda old, v: v,
    AssignOpKind.ADD_SET: operator.add,
    AssignOpKind.SUB_SET: operator.sub,
    AssignOpKind.MUL_SET: operator.mul,
    AssignOpKind.DIV_SET: ieee_div,
}


@dataclass
class Constant:
    value: float

    def evaluate(self, variables: VariableStore) -> float:
        return self.value


@dataclass
class VariableRef:
    name: str

    def evaluate(self, variables: VariableStore) -> float:
        return variables[self.name]


@dataclass
class BinaryOp:
    operator: OperatorKind
    left: "AstNode"
    right: "AstNode"

    def evaluate(self, variables: VariableStore) -> float:
        return evaluate_tree(self, variables)

    def apply(self, left_res: float, right_res: float) -> float:
        impl = BINARY_OPERATIONS.get(self.operator)
        if impl is None:
            raise CalcRuntimeError(f"Unexpected binary operator: {self.operator}")
        return impl(left_res, right_res)


@dataclass
class Assignment:
    operator: AssignOpKind
    name: str
    value: "AstNode"

    def evaluate(self, variables: VariableStore) -> float:
        return evaluate_tree(self, variables)

    def assign(self, v: float, variables: VariableStore) -> float:
        impl = ASSIGN_OPERATIONS.get(self.operator)
        if impl is None:
            raise CalcRuntimeError(f"Unexpected assignment operator: {self.operator}")
        new_value = impl(variables[self.name], v)
        variables[self.name] = new_value
        logger.debug("%s %s %r -> %r", self.name, self.operator, v, new_value)
        return new_value


AstNode = Constant | VariableRef | BinaryOp | Assignment


def evaluate_tree(tree: AstNode, variables: VariableStore) -> float:
    """Post-order walk with an explicit stack, so tree depth is not bounded
    by the interpreter's recursion limit.

    Both children of a BinaryOp always run, && and || included, left first.
    """
    results: list[float] = []
    pending: list[tuple[AstNode, bool]] = [(tree, False)]
    while pending:
        node, children_done = pending.pop()
        if isinstance(node, BinaryOp):
            if children_done:
                right_res = results.pop()
                left_res = results.pop()
                results.append(node.apply(left_res, right_res))
            else:
                pending.append((node, True))
                pending.append((node.right, False))
                pending.append((node.left, False))
        elif isinstance(node, Assignment):
            if children_done:
                results.append(node.assign(results.pop(), variables))
            else:
                pending.append((node, True))
                pending.append((node.value, False))
        elif isinstance(node, (Constant, VariableRef)):
            results.append(node.evaluate(variables))
        else:
            raise CalcRuntimeError(f"Unexpected expression type: {node}")
    return results.pop()
