"""Total Comp MCP server package (requires the 'mcp' extra)."""
