"""Dispatch adapters - Background task execution."""

from .thread_pool import ThreadPoolDispatcher

__all__ = ["ThreadPoolDispatcher"]
