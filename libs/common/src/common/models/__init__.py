"""Shared catalog and provider payload models."""

from .catalog import AppListEntry, DetailLevel, NormalizedRecord

__all__ = ["AppListEntry", "DetailLevel", "NormalizedRecord"]
