import os

from mcp.server.fastmcp import FastMCP
from mcp.server.transport_security import TransportSecuritySettings

from .diagnostics import analyze_infeasibility
from .errors import ModelError
from .options import get_default_options
from .schemas import Model, SolveOptions
from .solver import solve

app = FastMCP("Tableau Optimizer")


@app.tool()
def solve_model(model: Model, options: SolveOptions | None = None) -> dict:
    """Solve an LP/MILP with the dense two-phase simplex and branch and cut."""
    try:
        solution = solve(model, options)
    except ModelError as e:
        return {"error": str(e)}
    return solution.model_dump()


@app.tool()
def diagnose_infeasibility(model: Model, options: SolveOptions | None = None) -> dict:
    """Return heuristic infeasibility analysis for the given model."""
    try:
        return analyze_infeasibility(model, options)
    except ModelError as e:
        return {"error": str(e)}


@app.tool()
def default_options() -> dict:
    """Return the solver options used when a call supplies none."""
    return get_default_options().model_dump()


if __name__ == "__main__":
    import sys

    transport = os.environ.get("MCP_TRANSPORT", "stdio")

    if transport == "stdio" or "--stdio" in sys.argv:
        app.run(transport="stdio")
    else:
        port = int(os.environ.get("PORT", "8081"))
        app.settings.host = "0.0.0.0"
        app.settings.port = port
        app.settings.streamable_http_path = "/mcp"
        app.settings.transport_security = TransportSecuritySettings(
            enable_dns_rebinding_protection=False,
            allowed_hosts=["*"],
            allowed_origins=["*"],
        )
        app.run(transport="streamable-http")
