# =============================================================================
# core/__init__.py
# =============================================================================
# The Blinko side of the server: data models, the HTTP client, configuration
# and the exception hierarchy.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP or the MCP SDK.  core/ knows how to
#   talk to Blinko; tools/ knows how to talk to an MCP host.
# =============================================================================
