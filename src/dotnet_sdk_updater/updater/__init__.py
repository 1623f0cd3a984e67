"""Applies .NET SDK updates to a repository.

Rewrites global.json, commits the change on a new branch, and opens a pull
request describing the update and any security fixes it brings in.
"""
