"""MongoDB MCP Server.

Exposes MongoDB CRUD and administrative operations as a fixed catalog of
Model Context Protocol tools.
"""

__version__ = "1.0.0"
