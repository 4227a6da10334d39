"""Shared path constants for generated project layout."""

from __future__ import annotations

SPECIFY_DIR = ".specify"
SPECS_DIR = "specs"
MODULES_DIR = "modules"
README_NAME = "README.md"
MCP_CONFIG_NAME = ".mcp.json"

__all__ = ["MCP_CONFIG_NAME", "MODULES_DIR", "README_NAME", "SPECIFY_DIR", "SPECS_DIR"]
