"""Tests for the MCP server tools (skipped without the 'mcp' extra)."""

import asyncio

import pytest

pytest.importorskip("mcp")

from totalcomp.mcp.server import compare_packages, fiscal_year_info


def test_compare_packages():
    result = asyncio.run(compare_packages(
        packages=[{"name": "A", "gross_salary": 30000}, {"name": "B", "gross_salary": 35000}],
        year=2025,
    ))

    assert "error" not in result
    assert result["best"]["package_name"] == "B"
    assert result["fiscal_year"]["year"] == 2025


def test_compare_packages_error_payload():
    result = asyncio.run(compare_packages(packages=[{"gross_salary": -5}], year=2025))

    assert result["field"] == "gross_salary"
    assert "positive" in result["error"]


def test_fiscal_year_info():
    result = asyncio.run(fiscal_year_info(year=2025))

    assert result["meta"] == {"year": 2025, "uma_monthly": 3439.46, "usd_mxn_rate": 20.0}
    assert 2025 in result["available_years"]


def test_fiscal_year_info_missing_year():
    result = asyncio.run(fiscal_year_info(year=1999))
    assert "error" in result
