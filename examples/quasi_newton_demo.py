"""
Example: Quasi-Newton minimization with qnmin

Minimizes a few small test functions with the BFGS driver and prints the
outcome of each run.
"""

import numpy as np

from qnmin import NumericalError, Objective, SolutionOptions, quasi_newton


def skewed_bowl(x):
    return x[0] * x[0] - 2 * x[0] * x[1] + 4 * x[1] * x[1]


def booth(x):
    return (x[0] + 2 * x[1] - 7) ** 2 + (2 * x[0] + x[1] - 5) ** 2


def ellipsoid(x):
    return (x[0] - 1) ** 2 + 10 * (x[1] - 2) ** 2 + 0.5 * (x[2] + 1) ** 2


def report(name, result):
    print("=" * 60)
    print(name)
    print("=" * 60)
    print(f"Converged: {result.solution_valid} ({result.message})")
    print(f"Iterations: {result.iterations}, evaluations: {result.nfev}")
    print(f"Solution: {np.array2string(result.solution, precision=6)}")
    print(f"Objective: {result.objective:.3e}, gradient norm: {result.grad_norm:.3e}")
    print()


def main():
    report(
        "Skewed bowl x^2 - 2xy + 4y^2",
        quasi_newton(
            Objective(start=np.array([-3.0, 1.0]), func=skewed_bowl, delta=1e-13),
            SolutionOptions(tolerance=1e-11, max_iterations=5),
        ),
    )
    report(
        "Booth function",
        quasi_newton(Objective(start=np.array([0.0, 0.0]), func=booth)),
    )
    report(
        "Scaled ellipsoid in 3D",
        quasi_newton(Objective(start=np.zeros(3), func=ellipsoid, delta=1e-7)),
    )

    def cliff(x):
        return float("nan") if x[0] > 0.5 else (x[0] - 1.0) ** 2 + x[1] ** 2

    try:
        quasi_newton(Objective(start=np.array([0.0, 0.3]), func=cliff))
    except NumericalError as exc:
        print(f"Run aborted as expected: {exc}")


if __name__ == "__main__":
    main()
