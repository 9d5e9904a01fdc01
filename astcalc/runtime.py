import logging
import math

from astcalc.nodes import AstNode, CalcRuntimeError
from astcalc.parser import ParseFailure, parse
from astcalc.store import VariableStore

__all__ = ["CalcRuntimeError", "evaluate", "evaluate_line"]

logger = logging.getLogger(__name__)


def evaluate(tree: AstNode, variables: VariableStore) -> float:
    result = tree.evaluate(variables)
    if not math.isfinite(result):
        logger.debug("Evaluation produced a non-finite value: %r", result)
    return result


def evaluate_line(code: str, variables: VariableStore) -> float | ParseFailure:
    """Parse and evaluate a single line.

    Returns the numeric result, or the ParseFailure when the line does not
    parse completely; in that case nothing was evaluated and `variables` is
    left as it was.
    """
    parsed = parse(code)
    if isinstance(parsed, ParseFailure):
        return parsed
    return evaluate(parsed.tree, variables)
