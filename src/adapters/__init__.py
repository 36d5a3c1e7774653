"""Slack and webhook adapters for chatops-reader."""
