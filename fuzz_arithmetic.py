import math
import random
import re
import string
import warnings

from varcalc.runtime import Error, Number, evaluate
from varcalc.variables import VarTable

warnings.filterwarnings("ignore")


def eval_py(code: str) -> float | str:
    try:
        return eval(code)
    except Exception as e:
        return str(e)


def eval_my(code: str) -> float | str:
    results = evaluate(code, VarTable())
    if len(results) != 1:
        return f"{len(results)} results"
    result = results[0]
    if isinstance(result, Number):
        return result.value
    elif isinstance(result, Error):
        return result.message
    return str(result)


if __name__ == "__main__":
    alphabet = string.digits + ".()+-*/ "

    def generate(length: int) -> str:
        return "".join(random.choices(alphabet, k=length))

    while True:
        code = generate(10)

        if re.findall(r"\*\s*\*", code):
            continue  # avoid generating powers (10**4)

        if re.findall(r"/\s*/", code):
            continue  # avoid generating int devision (10 // 3)

        if re.findall(r"\d\s+[\d.]|\.\s+\d", code):
            continue  # juxtaposed numbers are two statements here, a syntax error in python

        res_py = eval_py(code)
        res_my = eval_my(code)
        if isinstance(res_py, (int, float)) and isinstance(res_my, float):
            if math.isclose(float(res_py), res_my) or (math.isnan(res_py) and math.isnan(res_my)):
                continue
        if isinstance(res_py, str) and res_py == "division by zero" and isinstance(res_my, float):
            continue  # ieee semantics: inf / nan instead of an exception
        if isinstance(res_py, str) and isinstance(res_my, str):
            continue
        if isinstance(res_py, str) and res_py.startswith("leading zeros in decimal integer literals are not permitted"):
            continue
        print(f"{code!r}\npy: {res_py}\nmy: {res_my}\n\n")
