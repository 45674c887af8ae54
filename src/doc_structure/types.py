"""Shared type aliases for parse modules."""

from __future__ import annotations

Priority = int
