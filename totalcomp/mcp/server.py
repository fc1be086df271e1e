"""Total Comp MCP Server - FastMCP implementation for package comparison tools."""

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from totalcomp.sdk import (
    TotalCompError,
    available_years,
    compare_request,
    load_fiscal_year,
)

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("totalcomp")


# --- Tools ---

@mcp.tool()
async def compare_packages(
    packages: list[dict[str, Any]] = Field(
        description=(
            "Packages to compare. Each has gross_salary plus optional name, regime "
            "('payroll' or 'simplified-flat-tax'), currency ('MXN'/'USD'), exchange_rate, "
            "payment_frequency, hours_per_week, benefits (tagged by 'kind'), "
            "other_benefits, equity and unpaid_rest_days"
        )
    ),
    year: int | None = Field(default=None, description="Fiscal year (defaults to the latest)"),
) -> dict[str, Any]:
    """Compute take-home pay for each package and pick the best by monthly adjusted net."""
    try:
        config = load_fiscal_year(year)
        result = compare_request({"packages": packages}, config=config)
        return result.model_dump(mode="json")

    except TotalCompError as e:
        logger.error(f"Error comparing packages: {e}")
        return {"error": str(e), "field": getattr(e, "field", None)}


@mcp.tool()
async def fiscal_year_info(
    year: int | None = Field(default=None, description="Fiscal year (defaults to the latest)"),
) -> dict[str, Any]:
    """Get UMA, minimum wage, exchange rate and tax tables for a fiscal year."""
    try:
        config = load_fiscal_year(year)
        return {
            "meta": config.meta().model_dump(),
            "available_years": available_years(),
            "tables": config.model_dump(mode="json"),
        }

    except TotalCompError as e:
        logger.error(f"Error loading fiscal year {year}: {e}")
        return {"error": str(e)}


# --- Resources ---

@mcp.resource("totalcomp://fiscal-years")
async def list_fiscal_years_resource() -> str:
    """List years with a fiscal-year table."""
    return json.dumps({"years": available_years()}, indent=2)


# --- Server Entry Point ---

def run_server():
    """Run the MCP server in stdio mode."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
