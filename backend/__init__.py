"""Backend package initialization.

Single source of truth for the server identity and package version so that
code, tests, and scripts can import without duplicating literals.
"""

SERVER_NAME = "mcp-sqlite-server"
PACKAGE_VERSION = "1.0.0"  # Keep in sync with pyproject version.

__all__ = ["SERVER_NAME", "PACKAGE_VERSION"]
