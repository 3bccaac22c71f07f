"""Reviewer selection engine for GitHub pull requests."""
