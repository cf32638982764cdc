"""Helpers for building resource names that fit Kubernetes length limits."""

from __future__ import annotations


def truncate_name(name: str, length: int) -> str:
    """Shorten ``name`` to ``length`` characters by replacing its middle with ``---``."""
    if len(name) <= length:
        return name
    max_length = length - 3
    suffix_len = max_length // 2
    prefix_len = max_length - suffix_len
    suffix = name[len(name) - suffix_len:]
    return f"{name[:prefix_len]}---{suffix}"