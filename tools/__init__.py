# =============================================================================
# tools/__init__.py
# =============================================================================
# The MCP-facing layer.
#
#   arguments.py   per-tool argument models (validation + JSON schema)
#   dispatcher.py  the tool catalog and name → BlinkoClient call mapping
#   formatting.py  text blocks returned to the host
#   mcp_server.py  FastMCP registration and stdio serving
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT build URLs or touch HTTP (that's core/blinko.py)
#   - They do NOT keep state between calls
# =============================================================================
