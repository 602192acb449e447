from __future__ import annotations

"""
Simple TCP REPL server for Lispy.

Protocol: JSON per line over TCP.
- Request: {"cmd": "eval", "code": "(+ 1 2)"}
- Response: {"ok": true, "result": "3"} or {"ok": false, "error": <message>}

An evaluation that produces an Error value is still a successful request:
the result is the printed error, e.g. "Error: Division By Zero".
"""

import json
import logging
import socket
import threading
from typing import Optional, Tuple, Union

from lispy.errors import LispyError
from lispy.interpreter import Interpreter

logger = logging.getLogger(__name__)

HOST = "127.0.0.1"
PORT = 8765


def handle_request(line: Union[bytes, str], interpreter: Interpreter) -> dict:
    """Answer one request line."""
    try:
        text = line.decode("utf-8") if isinstance(line, bytes) else line
        req = json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError) as ex:
        return {"ok": False, "error": f"Invalid request: {ex}"}
    if not isinstance(req, dict):
        return {"ok": False, "error": "Invalid request: expected a JSON object"}

    if req.get("cmd") != "eval":
        return {"ok": False, "error": f"Unknown cmd: {req.get('cmd')}"}
    code = req.get("code", "")
    if not isinstance(code, str):
        return {"ok": False, "error": "Invalid request: code must be a string"}
    try:
        result = interpreter.eval(code)
    except LispyError as ex:
        return {"ok": False, "error": str(ex)}
    return {"ok": True, "result": str(result)}


class ReplServer:
    def __init__(self, host: str = HOST, port: int = PORT, interpreter: Optional[Interpreter] = None):
        self.host = host
        self.port = port
        # The interpreter holds configuration only, so client threads can share it
        self.interp = Interpreter() if interpreter is None else interpreter

    def serve_forever(self):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            s.bind((self.host, self.port))
            s.listen(5)
            logger.info(f"Serving Lispy REPL on {self.host}:{self.port}")
            while True:
                conn, addr = s.accept()
                threading.Thread(target=self._handle_client, args=(conn, addr), daemon=True).start()

    def _handle_client(self, conn: socket.socket, addr: Tuple[str, int]):
        logger.debug(f"Client connected: {addr}")
        with conn:
            buf = b""
            while True:
                data = conn.recv(4096)
                if not data:
                    break
                buf += data
                while b"\n" in buf:
                    line, buf = buf.split(b"\n", 1)
                    line = line.strip()
                    if not line:
                        continue
                    resp = handle_request(line, self.interp)
                    conn.sendall((json.dumps(resp) + "\n").encode("utf-8"))
        logger.debug(f"Client disconnected: {addr}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    ReplServer().serve_forever()
