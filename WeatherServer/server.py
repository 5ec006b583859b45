"""MCP stdio server exposing the get_current_weather tool."""
import argparse
import asyncio
import dataclasses
import logging
import signal
from typing import Any, Dict, List, Optional

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from config import ConfigError, MockMode, ServerConfig, load_config
from logging_setup import setup_logging
from report_formatter import render_report
from tool_errors import ToolError, UnknownToolError
from weather_service import WeatherService

SERVER_NAME = "weather-server"
SERVER_VERSION = "1.0.0"
TOOL_NAME = "get_current_weather"

WEATHER_TOOL = types.Tool(
    name=TOOL_NAME,
    description="Get current weather for a specified city",
    inputSchema={
        "type": "object",
        "properties": {
            "city": {
                "type": "string",
                "description": 'City name (e.g., "London", "New York", "Tokyo")',
            },
        },
        "required": ["city"],
    },
)


def list_tools() -> List[types.Tool]:
    return [WEATHER_TOOL]


async def call_tool(
    service: WeatherService,
    name: str,
    arguments: Optional[Dict[str, Any]],
) -> List[types.TextContent]:
    """
    Dispatch a tool call by name.

    Raises:
        UnknownToolError: If ``name`` isn't a tool this server provides
        InvalidParamsError: If the arguments are rejected by the service
    """
    if name != TOOL_NAME:
        raise UnknownToolError(f"Unknown tool: {name}")
    report = await service.get_current_weather(arguments)
    return [types.TextContent(type="text", text=render_report(report))]


def build_server(service: WeatherService) -> Server:
    """Create the MCP server and register the tool handlers."""
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def handle_list_tools() -> List[types.Tool]:
        return list_tools()

    # Registered directly rather than through @server.call_tool(), which turns
    # every exception into a tool result; these must be JSON-RPC errors.
    async def handle_call_tool(request: types.CallToolRequest) -> types.ServerResult:
        try:
            content = await call_tool(service, request.params.name, request.params.arguments)
        except ToolError as e:
            raise McpError(types.ErrorData(code=e.code, message=str(e))) from e
        return types.ServerResult(types.CallToolResult(content=content, isError=False))

    server.request_handlers[types.CallToolRequest] = handle_call_tool
    return server


async def serve(config: ServerConfig) -> None:
    """Run the server over stdio until the client disconnects."""
    service = WeatherService(config)
    server = build_server(service)
    async with stdio_server() as (read_stream, write_stream):
        logging.info("Weather MCP server running on stdio")
        await server.run(read_stream, write_stream, server.create_initialization_options())


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("Weather MCP server")
    parser.add_argument("--log-file", default=None)
    parser.add_argument("--mock", action="store_true", help="Always answer from the mock table")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def signal_handler(signum, frame):
    logging.info("Received signal %s, shutting down", signum)
    raise KeyboardInterrupt()


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    try:
        config = load_config()
    except ConfigError as exc:
        raise SystemExit(f"Configuration error: {exc}") from exc
    if args.mock:
        config = dataclasses.replace(config, mock_mode=MockMode.ON)

    listener = setup_logging(
        "DEBUG" if args.verbose else config.log_level,
        log_file=args.log_file,
        sink_token=config.log_sink_token,
        sink_url=config.log_sink_url,
    )
    logging.info(
        "Configuration loaded: api_key=%s mock_mode=%s mock=%s",
        "set" if config.has_api_key else "missing",
        config.mock_mode.value,
        config.use_mock,
    )

    signal.signal(signal.SIGTERM, signal_handler)

    try:
        asyncio.run(serve(config))
    except KeyboardInterrupt:
        logging.info("Stopping server")
    finally:
        if listener is not None:
            listener.stop()


if __name__ == "__main__":
    main()
