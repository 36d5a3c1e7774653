"""Core domain package for chatops-reader.

Core contains the alert message parser and the channel reader workflow
without any Slack or HTTP specific code, keeping the parsing logic portable.
"""
