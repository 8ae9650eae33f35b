"""Hosts de renderização."""

from app.infra.render.memory_host import InMemoryRenderHost, RenderedCard

__all__ = ["InMemoryRenderHost", "RenderedCard"]
