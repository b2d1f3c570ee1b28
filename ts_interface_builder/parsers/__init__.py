"""Source front ends."""

from ts_interface_builder.parsers.typescript_parser import ParsedFile, TypeScriptParser

__all__ = ["ParsedFile", "TypeScriptParser"]
