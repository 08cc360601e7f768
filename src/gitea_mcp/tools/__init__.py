"""Tool catalogue: registry, argument resolution and resource handlers."""

from gitea_mcp.tools import issues, labels, milestones, projects
from gitea_mcp.tools.arguments import resolve_arguments
from gitea_mcp.tools.errors import ToolError, ToolInputError
from gitea_mcp.tools.registry import ToolEntry, ToolRegistry

_CATEGORIES = (issues, labels, milestones, projects)


def build_registry() -> ToolRegistry:
    """Return a frozen registry holding every tool, issues first."""
    registry = ToolRegistry()
    for category in _CATEGORIES:
        category.register(registry)
    return registry.freeze()


__all__ = [
    "ToolEntry",
    "ToolError",
    "ToolInputError",
    "ToolRegistry",
    "build_registry",
    "resolve_arguments",
]
