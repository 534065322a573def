"""Scheduling adapters - Event loop clocks."""

from .asyncio_ticks import AsyncioTickScheduler

__all__ = ["AsyncioTickScheduler"]
