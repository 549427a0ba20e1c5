#!/usr/bin/env python3
"""
Quick smoke check that the MCP server imports, registers its tools and solves.
Run this before connecting a desktop client.
"""

import asyncio
import sys

from tableau_optimizer.server import app, solve_model
from tableau_optimizer import Model, greater_eq

EXPECTED_TOOLS = ["solve_model", "diagnose_infeasibility", "default_options"]


def check_tools_available() -> bool:
    print("Checking available tools...")
    tool_names = [tool.name for tool in asyncio.run(app.list_tools())]
    for tool_name in tool_names:
        print(f"  - {tool_name}")

    missing = [name for name in EXPECTED_TOOLS if name not in tool_names]
    if missing:
        print(f"Missing tools: {missing}")
        return False
    return True


def check_small_lp() -> bool:
    print("\nSolving a small LP...")
    model = Model(
        direction="minimize",
        objective="cost",
        constraints={"c1": greater_eq(8), "c2": greater_eq(6)},
        variables={"x": {"cost": 3, "c1": 4, "c2": 1}, "y": {"cost": 2, "c1": 1.5, "c2": 1.5}},
    )
    result = solve_model(model)
    print(f"  status={result.get('status')} result={result.get('result')}")
    return result.get("status") == "optimal"


if __name__ == "__main__":
    ok = check_tools_available()
    ok &= check_small_lp()
    if not ok:
        print("Server check failed.")
        sys.exit(1)
    print("\nServer is ready. Run 'python -m tableau_optimizer.server' (MCP_TRANSPORT=http for HTTP).")
