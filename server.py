from contextlib import asynccontextmanager
from core.client import close_client
from core.logging_config import setup_logging
from mcp.server.fastmcp import FastMCP
from pathlib import Path
from importlib import import_module
import logging
import pkgutil
import sys
from typing import Any, AsyncIterator, List, Optional

logger = logging.getLogger(__name__)

SERVER_NAME = "mattermost"
TOOLS_PACKAGE = "tools"

INSTRUCTIONS = (
    "Tools for reading and writing a Mattermost workspace. Channel and user listings are paginated "
    "(page starts at 0, at most 200 per page). mattermost_get_channel_history can walk the whole "
    "history with get_all=true; bound it with max_posts. Every tool answers with JSON; failures "
    "carry an 'error' key."
)


###################################################### MCP Tools ######################################################

def iter_tool_modules(tools_path: Optional[Path] = None):
    """Yield every public module of the tools package."""
    tools_path = tools_path or Path(__file__).resolve().parent / TOOLS_PACKAGE
    if not tools_path.is_dir():
        logger.warning(f"Tools directory not found: {tools_path}")
        return
    for _finder, name, _ispkg in pkgutil.iter_modules([str(tools_path)]):
        if name.startswith("_"):
            continue
        module_name = f"{TOOLS_PACKAGE}.{name}"
        try:
            mod = import_module(module_name)
            logger.info(f"Imported tools module: {module_name}")
            yield module_name, mod
        except Exception:
            logger.exception(f"Failed to load tools from module {module_name}")


def register_tools(mcp: Any, modules=None) -> List[str]:
    """Register each `get_tools()` entry of the tools modules on `mcp`.

    mapping: tool_name -> { 'func': callable, 'title': str, 'description': str }
    """
    registered: List[str] = []
    for module_name, mod in (modules if modules is not None else iter_tool_modules()):
        if not hasattr(mod, "get_tools"):
            continue
        for tool_name, meta in mod.get_tools().items():
            if isinstance(meta, dict):
                func = meta.get("func")
                title = meta.get("title")
                description = meta.get("description")
            else:
                func, title, description = meta, None, None

            if not callable(func):
                logger.warning(f"Tool {tool_name} in {module_name} did not provide a callable; skipping")
                continue
            if tool_name in registered:
                logger.warning(f"Tool {tool_name} from {module_name} is already registered; skipping")
                continue

            try:
                mcp.add_tool(func, name=tool_name, title=title, description=description)
                logger.info(f"Added tool: {tool_name} (title={title}) from {module_name}")
                registered.append(tool_name)
            except Exception:
                logger.exception(f"Failed to register tool {tool_name} from {module_name}")
    logger.info(f"Total tools registered: {len(registered)} , tool names: {registered}")
    return registered


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[None]:
    """Close the shared Mattermost HTTP client when the server stops."""
    try:
        yield
    finally:
        await close_client()
        logger.info("Mattermost client closed.")


def create_server() -> FastMCP:
    mcp = FastMCP(SERVER_NAME, instructions=INSTRUCTIONS, lifespan=lifespan)
    logger.info("MCP server instance created.")
    register_tools(mcp)
    return mcp


###################################################### Startup ######################################################

if __name__ == "__main__":
    logger = setup_logging()
    logger.info("MCP server bootstrap starting.")
    try:
        mcp = create_server()
        logger.info("Starting MCP server...")
        mcp.run(transport="stdio")
        logger.info("MCP server shut down.")
    except Exception:
        logger.exception("Unhandled exception running MCP server")
        print("Unhandled exception occurred. See logs/server.log for details.", file=sys.stderr)
        sys.exit(-1)
