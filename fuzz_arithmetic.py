"""Compare random +, * and bracket expressions against Python's eval.

Only + and * are generated: right-associative grouping gives the same value
as Python's left-associative one for those, so the results must agree.
"""
import math
import random
import re
import string

from astcalc.parser import ParseFailure
from astcalc.runtime import evaluate_line
from astcalc.store import VariableStore


def eval_py(code: str) -> float | str:
    try:
        return float(eval(code))
    except Exception as e:
        return str(e)


def eval_my(code: str) -> float | str:
    try:
        result = evaluate_line(code, VariableStore())
    except Exception as e:
        return str(e)
    if isinstance(result, ParseFailure):
        return str(result)
    return result


if __name__ == "__main__":
    alphabet = string.digits + "()+* "

    def generate(length: int) -> str:
        return "".join(random.choices(alphabet, k=length))

    while True:
        code = generate(10)

        if re.findall(r"\*\s*\*", code):
            continue  # avoid generating powers (10**4)

        if re.findall(r"(^|[(+*])\s*\+", code):
            continue  # no unary plus here, only signed literals

        if re.findall(r"\d\s+\d", code):
            continue  # "1 2" is a syntax error in python, a parse failure here

        res_py = eval_py(code)
        res_my = eval_my(code)
        if isinstance(res_py, float) and isinstance(res_my, float) and math.isclose(res_my, res_py):
            continue
        if isinstance(res_py, str) and isinstance(res_my, str):
            continue
        if isinstance(res_py, str) and res_py.startswith("leading zeros in decimal integer literals are not permitted"):
            continue
        print(f"{code!r}\npy: {res_py}\nmy: {res_my}\n\n")
