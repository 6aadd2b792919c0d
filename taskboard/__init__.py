"""Taskboard: task and group management API."""
