"""Shared test constants"""

CAMO_USER_AGENT = "github-camo (abc123)"
CLIENT_ADDRESS = ("203.0.113.7", 51515)
