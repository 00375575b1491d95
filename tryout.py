from varcalc.runtime import evaluate
from varcalc.tokenizer import TokenizerError, tokenize
from varcalc.variables import VarTable

variables = VarTable()

for code in [
    "5",
    "-1",
    "1 + 1",
    "--5",
    "1 + -1",
    "4 + 6 * 3",
    "(4 + 6)",
    "(4+6) * 3",
    "80225/+2",
    "7/6/2000",
    "1.23e-4 * 2",
    "1 / 0",
    "let a = 1; let b= 2; let c = a + b",
    "c / -10",
    "a = 10; a + b",
    "let a = 3",
    "d = 1",
    "(1 + 2",
    "1 + @; 2",
    "1.2.3",
    "5 + 3 ;; 2 * 4",
    "5 + 3;",
    "q2",
]:
    print("=" * 10)
    print(f"code: {code!r}")
    try:
        tokens = tokenize(code)
    except TokenizerError as e:
        print(f"tokens: {e}")
    else:
        print(f"tokens: {' '.join(str(t) for t in tokens)}")

    results = evaluate(code, variables)
    results_str = "\n".join(f" {i + 1:> 2}: {res}" for i, res in enumerate(results))
    print(f"results:\n{results_str}")
    print(f"variables: {', '.join(f'{var.label}={var.value}' for var in variables)}")
