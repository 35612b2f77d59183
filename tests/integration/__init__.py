# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Integration tests for the MCP server and command line runner.

This package contains tests that run the built-in extractors end to end
against a generated React/Next.js project.
"""
