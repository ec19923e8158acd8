"""FastMCP server implementation for sitestage."""

from pathlib import Path

from mcp.server.fastmcp import FastMCP

from sitestage.errors import SiteStageError
from sitestage.models import FileInfo
from sitestage.storage import StateStore
from sitestage.workspace import Workspace


def create_mcp_server(state_path: Path) -> FastMCP:
    """Create an MCP server driving one editing session.

    Design: 1 process = 1 workspace, so there is a single live document.

    Args:
        state_path: Path to the state database holding recent files

    Returns:
        Configured FastMCP server instance
    """
    mcp = FastMCP(
        name="sitestage",
    )

    workspace = Workspace(state=StateStore(state_path))

    @mcp.tool(name="open")
    async def open_document(path: str) -> str:
        """Open a site document for edition.

        Args:
            path: Path of the HTML file to open

        Returns:
            Summary of the loaded document, or the reason it was rejected
        """
        try:
            await workspace.open_async(FileInfo.from_path(path))
        except (SiteStageError, OSError, ValueError) as e:
            return f"Error: {e}"
        return _format_status(workspace.status())

    @mcp.tool()
    async def open_template(url: str) -> str:
        """Open a template; it has to be saved with save_as.

        Args:
            url: Template path or url

        Returns:
            Summary of the loaded document, or the reason it was rejected
        """
        try:
            await workspace.open_template_async(url)
        except (SiteStageError, OSError, ValueError) as e:
            return f"Error: {e}"
        return _format_status(workspace.status())

    @mcp.tool()
    async def save() -> str:
        """Save the current document to where it was opened from."""
        try:
            await workspace.save_async()
        except (SiteStageError, OSError) as e:
            return f"Error: {e}"
        return f"Saved {workspace.session.file_info.url}"

    @mcp.tool()
    async def save_as(path: str) -> str:
        """Save the current document to a new path and keep editing it there.

        Args:
            path: Destination path of the HTML file
        """
        try:
            await workspace.save_as_async(FileInfo.from_path(path))
        except (SiteStageError, OSError) as e:
            return f"Error: {e}"
        return f"Saved {workspace.session.file_info.url}"

    @mcp.tool()
    def close() -> str:
        """Forget the current save target."""
        workspace.close()
        return "Closed"

    @mcp.tool()
    async def html() -> str:
        """Return the clean HTML of the current document."""
        if not workspace.surface.has_content():
            return "Error: No document is open"
        return await workspace.get_html_async()

    @mcp.tool()
    def recent() -> str:
        """List the recently opened documents."""
        files = workspace.recent_files.list()
        if not files:
            return "No recent files"
        return "\n".join(f"{i}. {f.name:<30} {f.url}" for i, f in enumerate(files, 1))

    @mcp.tool()
    def status() -> str:
        """Describe the current editing session."""
        return _format_status(workspace.status())

    return mcp


def _format_status(status: dict) -> str:
    lines = [f"{key}: {value}" for key, value in status.items()]
    return "\n".join(lines)
