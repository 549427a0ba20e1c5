#!/usr/bin/env python3
import argparse
import json
import random
from pathlib import Path
from typing import Dict, Optional

from tableau_optimizer import Model, less_eq


def generate_random_model(
    num_vars: int,
    num_constraints: int,
    seed: Optional[int] = None,
    integer: bool = False,
) -> Model:
    rng = random.Random(seed)
    variables: Dict[str, Dict[str, float]] = {
        f"x{i}": {"value": rng.uniform(1.0, 4.0)} for i in range(num_vars)
    }
    constraints = {}
    for j in range(num_constraints):
        for coefficients in variables.values():
            coefficients[f"c{j}"] = rng.uniform(0.5, 5.0)
        constraints[f"c{j}"] = less_eq(rng.uniform(num_vars * 2.0, num_vars * 6.0))
    return Model(
        direction="maximize",
        objective="value",
        constraints=constraints,
        variables=variables,
        integers=True if integer else None,
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate random feasible LP/MILP instances.")
    parser.add_argument("--vars", type=int, default=3, help="Number of variables")
    parser.add_argument("--constraints", type=int, default=3, help="Number of constraints")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--count", type=int, default=1, help="Number of instances")
    parser.add_argument("--integer", action="store_true", help="Make every variable integer")
    parser.add_argument("--out", type=Path, default=None, help="Optional output file")
    args = parser.parse_args()

    instances = [
        generate_random_model(args.vars, args.constraints, (args.seed or 0) + idx, args.integer)
        for idx in range(args.count)
    ]
    payload = [instance.model_dump(exclude_none=True) for instance in instances]

    if args.out:
        Path(args.out).write_text(json.dumps(payload, indent=2))
    else:
        print(json.dumps(payload, indent=2))


if __name__ == "__main__":
    main()
