"""Process-level infrastructure: scoped replacement of global bindings."""

from .global_override import GlobalOverride, GlobalStub, ReplacedBinding

__all__ = ["GlobalOverride", "GlobalStub", "ReplacedBinding"]
