"""Documentation engine for the CuberiteAGI Lua namespaces.

Modules:
- fs_scan.py: Candidate module paths and Lua file discovery.
- errors.py: Exception types shared by the loader and config.
- docblock.py: ``---@param`` / ``---@return`` comment-block parsing.
- lua_scan.py: Line-oriented scan for namespaced function declarations.
- runtime.py: Live Lua state (lupa) that candidate modules are loaded into.
- introspect.py: Walks live namespace tables for functions and constants.
- merge.py: Combines runtime and source findings into one member per name.
- serialize.py / render.py: JSON, Markdown and EmmyLua outputs.
- pipeline.py: Runs the whole pass and writes the artifacts.
"""

__all__ = [
	"config",
	"docblock",
	"errors",
	"fs_scan",
	"introspect",
	"lua_scan",
	"merge",
	"model",
	"pipeline",
	"render",
	"runtime",
	"serialize",
]
