#!/usr/bin/env python3
import json
import time
from pathlib import Path

from tableau_optimizer import Model, SolveOptions, solve
from scripts.generate_instances import generate_random_model


def load_example(name: str) -> Model:
    path = Path(__file__).resolve().parent.parent / "examples" / name
    return Model.model_validate(json.loads(path.read_text()))


def main() -> None:
    opts = SolveOptions()
    cases = [
        ("examples/small_lp.json", load_example("small_lp.json")),
        ("examples/knapsack.json", load_example("knapsack.json")),
    ]
    for seed in range(3):
        cases.append((f"random-lp-{seed}", generate_random_model(8, 6, seed)))
        cases.append((f"random-mip-{seed}", generate_random_model(5, 4, seed, integer=True)))

    print("name,status,result,time_ms")
    for name, model in cases:
        start = time.perf_counter()
        solution = solve(model, opts)
        elapsed_ms = (time.perf_counter() - start) * 1000
        print(f"{name},{solution.status},{solution.result},{elapsed_ms:.2f}")


if __name__ == "__main__":
    main()
