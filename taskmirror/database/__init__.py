"""Persistence layer for taskmirror."""
