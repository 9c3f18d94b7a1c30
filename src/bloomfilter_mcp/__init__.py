"""
Bloomfilter MCP Server

Exposes the Bloomfilter client as agent tools over MCP stdio, with a
click CLI for configuration and one-shot calls.
"""

from bloomfilter_client import __version__

__all__ = ["__version__"]
