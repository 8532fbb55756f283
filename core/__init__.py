"""Mattermost client, pagination and formatting core used by the MCP tools."""
