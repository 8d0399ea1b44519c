"""JSON-RPC 2.0 request dispatcher over newline-delimited stdio.

One line is one request. Requests are handled strictly one at a time: the
next line is not read until the previous response has been written.
"""

import json
import logging
import queue
import sys
import threading
from typing import Any, Dict, Optional

from . import __version__
from .errors import INTERNAL_ERROR, METHOD_NOT_FOUND, PARSE_ERROR, JsonRpcError, MultiModelMCPError
from .tools import TOOL_CATALOG, ToolExecutor, ToolRequest

logger = logging.getLogger(__name__)

SERVER_NAME = "multi-model-mcp"
PROTOCOL_VERSION = "1.0"
DEFAULT_IDLE_TIMEOUT = 60.0

_JSON = Dict[str, Any]


class IdleTimeout(Exception):
    """No line arrived within the idle timeout. Not an error."""


_EOF = object()


class LineReader:
    """Reads lines on a background thread so waits can time out.

    A line is only read when the dispatcher asks for one, so the reader never
    runs ahead of request processing. After a timeout the outstanding read
    stays pending and the next call simply waits for it again.
    """

    def __init__(self, stream):
        self._stream = stream
        self._wanted = threading.Semaphore(0)
        self._lines: "queue.Queue[Any]" = queue.Queue()
        self._pending = False
        self._thread = threading.Thread(target=self._run, name="stdin-reader", daemon=True)
        self._thread.start()

    def _run(self) -> None:
        while True:
            self._wanted.acquire()
            try:
                line = self._stream.readline()
            except (OSError, ValueError) as e:
                self._lines.put(e)
                return
            if not line:
                self._lines.put(_EOF)
                return
            self._lines.put(line)

    def readline(self, timeout: Optional[float]):
        """Return the next line, or None at end of stream.

        Raises:
            IdleTimeout: If nothing arrived within ``timeout`` seconds.
            OSError: On a genuine read failure.
        """
        if not self._pending:
            self._wanted.release()
            self._pending = True
        try:
            item = self._lines.get(timeout=timeout)
        except queue.Empty:
            raise IdleTimeout() from None
        self._pending = False
        if item is _EOF:
            return None
        if isinstance(item, Exception):
            raise item
        return item


def jsonrpc_result(req_id: Any, result: Any) -> _JSON:
    return {"jsonrpc": "2.0", "id": req_id, "result": result}


def jsonrpc_error(req_id: Any, code: int, message: str) -> _JSON:
    return {"jsonrpc": "2.0", "id": req_id, "error": {"code": code, "message": message}}


def parse_request(line) -> _JSON:
    """Decode one line into a request object.

    Raises:
        JsonRpcError: With PARSE_ERROR if the line is not a request.
    """
    if isinstance(line, bytes):
        try:
            line = line.decode("utf-8")
        except UnicodeDecodeError as e:
            raise JsonRpcError(PARSE_ERROR, f"Parse error: {e}") from e

    try:
        request = json.loads(line)
    except json.JSONDecodeError as e:
        raise JsonRpcError(PARSE_ERROR, f"Parse error: {e}") from e
    except RecursionError as e:
        raise JsonRpcError(PARSE_ERROR, "Parse error: input nested too deeply") from e

    if not isinstance(request, dict):
        raise JsonRpcError(PARSE_ERROR, "Parse error: request must be a JSON object")
    if not isinstance(request.get("method"), str):
        raise JsonRpcError(PARSE_ERROR, "Parse error: missing field `method`")
    return request


class RequestDispatcher:
    """Owns the read-eval-write loop for a single stdio connection."""

    def __init__(
        self,
        executor: ToolExecutor,
        input_stream=None,
        output_stream=None,
        idle_timeout: float = DEFAULT_IDLE_TIMEOUT,
    ):
        self.executor = executor
        self._input = input_stream if input_stream is not None else sys.stdin.buffer
        self._output = output_stream if output_stream is not None else sys.stdout
        self.idle_timeout = idle_timeout

    # -- protocol methods -------------------------------------------------

    def _initialize(self) -> _JSON:
        return {
            "protocolVersion": PROTOCOL_VERSION,
            "serverInfo": {"name": SERVER_NAME, "version": __version__},
            "capabilities": {"tools": {"listChanged": False}},
        }

    def _tools_list(self) -> _JSON:
        return {"tools": TOOL_CATALOG}

    def _tools_call(self, params: Any) -> _JSON:
        name = ""
        arguments = None
        if isinstance(params, dict):
            if isinstance(params.get("name"), str):
                name = params["name"]
            arguments = params.get("arguments")

        try:
            tool_result = self.executor.execute(ToolRequest(tool=name, arguments=arguments))
        except MultiModelMCPError as e:
            logger.error("Tool %s failed: %s", name, e)
            raise JsonRpcError(INTERNAL_ERROR, f"Tool execution failed: {e}") from e
        except Exception as e:  # noqa: BLE001
            logger.exception("Tool %s raised unexpectedly", name)
            raise JsonRpcError(INTERNAL_ERROR, f"Tool execution failed: {e}") from e

        # Unknown tool: error text with isError set, never a bare null result
        if not tool_result.success:
            return {
                "content": [{"type": "text", "text": tool_result.error or ""}],
                "isError": True,
            }

        text = json.dumps(tool_result.result, indent=2, ensure_ascii=False)
        return {"content": [{"type": "text", "text": text}]}

    # -- dispatch ----------------------------------------------------------

    def handle_request(self, request: _JSON) -> _JSON:
        """Route one parsed request and build its response."""
        method = request["method"]
        req_id = request.get("id")
        logger.info("Handling request: %s", method)

        try:
            if method == "initialize":
                return jsonrpc_result(req_id, self._initialize())
            if method == "tools/list":
                return jsonrpc_result(req_id, self._tools_list())
            if method == "tools/call":
                return jsonrpc_result(req_id, self._tools_call(request.get("params")))
            raise JsonRpcError(METHOD_NOT_FOUND, f"Method not found: {method}")
        except JsonRpcError as e:
            return jsonrpc_error(req_id, e.code, e.message)

    def handle_line(self, line) -> Optional[_JSON]:
        """Handle one raw input line; blank lines produce no response."""
        text = line.decode("utf-8", errors="replace") if isinstance(line, bytes) else line
        if not text.strip():
            return None

        try:
            request = parse_request(line)
        except JsonRpcError as e:
            logger.error("Failed to parse JSON-RPC request: %s", e.message)
            return jsonrpc_error(None, e.code, e.message)

        try:
            return self.handle_request(request)
        except Exception as e:  # noqa: BLE001
            logger.exception("Unhandled error while processing request")
            return jsonrpc_error(request.get("id"), INTERNAL_ERROR, f"Internal error: {e}")

    def _write(self, response: _JSON) -> None:
        self._output.write(json.dumps(response) + "\n")
        self._output.flush()

    def serve_forever(self) -> int:
        """Run until end of input.

        Returns:
            int: 0 on end of stream or a closed output pipe, 1 on a read error.
        """
        reader = LineReader(self._input)

        while True:
            try:
                line = reader.readline(self.idle_timeout)
            except IdleTimeout:
                logger.debug("No input for %.0fs; still waiting", self.idle_timeout)
                continue
            except (OSError, ValueError) as e:
                logger.error("Error reading from stdin: %s", e)
                return 1

            if line is None:
                logger.info("stdin closed, shutting down")
                return 0

            response = self.handle_line(line)
            if response is None:
                continue

            try:
                self._write(response)
            except BrokenPipeError:
                # Client went away; nothing left to serve
                logger.info("stdout closed, shutting down")
                return 0
