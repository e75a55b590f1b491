"""HTTP runner for the Caption Search MCP server (remote deployment)."""
import os
os.environ.setdefault("CAPTION_SEARCH_TRANSPORT", "streamable-http")

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.server import TransportSecuritySettings
from caption_search.server import (
    app_lifespan,
    get_captions,
    search_captions,
    batch_search,
    find_key_moments,
    help_resource,
    TOOL_ANNOTATIONS,
)

server = FastMCP(
    "Caption Search",
    instructions="Search subtitle transcripts and locate matches on a video timeline",
    lifespan=app_lifespan,
    host="0.0.0.0",
    port=int(os.environ.get("PORT", "8401")),
    transport_security=TransportSecuritySettings(enable_dns_rebinding_protection=False),
)

server.tool(annotations=TOOL_ANNOTATIONS)(get_captions)
server.tool(annotations=TOOL_ANNOTATIONS)(search_captions)
server.tool(annotations=TOOL_ANNOTATIONS)(batch_search)

server.prompt()(find_key_moments)

server.resource("captions://help")(help_resource)

server.run(transport="streamable-http")
