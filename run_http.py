"""HTTP runner for MCP server (remote deployment)."""
from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.server import TransportSecuritySettings
from yt_transcript_extractor.server import (
    app_lifespan,
    get_transcript,
    get_transcript_for_language,
    list_languages,
    open_video,
    switch_language,
    export_transcript,
    help_resource,
    TOOL_ANNOTATIONS,
)

server = FastMCP(
    "YouTube Transcript Extractor",
    instructions="Extract YouTube video transcripts with caption track, internal API and page fallbacks",
    lifespan=app_lifespan,
    host="0.0.0.0",
    port=8401,
    transport_security=TransportSecuritySettings(enable_dns_rebinding_protection=False),
)

# Register tools with annotations
server.tool(annotations=TOOL_ANNOTATIONS)(get_transcript)
server.tool(annotations=TOOL_ANNOTATIONS)(get_transcript_for_language)
server.tool(annotations=TOOL_ANNOTATIONS)(list_languages)
server.tool(annotations=TOOL_ANNOTATIONS)(open_video)
server.tool(annotations=TOOL_ANNOTATIONS)(switch_language)
server.tool(annotations=TOOL_ANNOTATIONS)(export_transcript)

# Register resources
server.resource("youtube://help")(help_resource)

server.run(transport="streamable-http")
