import socket
import threading
from contextlib import closing
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer


class SoapHandler(BaseHTTPRequestHandler):
    """
    Minimal web service used by the poster tests.

    /echo           -> 200, body echoed back
    /status/<code>  -> <code> with the default reason phrase
    /reason         -> 400 with a URL-encoded reason phrase
    /no-reason      -> 418 with an empty reason phrase
    /capture        -> 200 "ok", request headers recorded on the server
    /unicode        -> 200 with a UTF-8 body
    """

    def log_message(self, *args):
        pass

    def _read_body(self) -> bytes:
        length = int(self.headers.get("Content-Length") or 0)
        return self.rfile.read(length) if length else b""

    def _reply(self, status: int, body: bytes = b"", reason: str | None = None):
        self.send_response(status, reason)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        if body:
            self.wfile.write(body)

    def do_POST(self):
        body = self._read_body()
        self.server.requests.append((self.command, self.path, list(self.headers.items()), body))

        if self.path == "/echo":
            self._reply(200, body)
        elif self.path.startswith("/status/"):
            self._reply(int(self.path.rsplit("/", 1)[1]), b"<fault/>")
        elif self.path == "/reason":
            self._reply(400, reason="Bad%20Request+for+gr%C3%BC%C3%9Fe")
        elif self.path == "/no-reason":
            self._reply(418, reason="")
        elif self.path == "/capture":
            self._reply(200, b"ok")
        elif self.path == "/unicode":
            self._reply(200, "grüße".encode("utf-8"))
        else:
            self._reply(404)


class SoapServer:
    def __init__(self):
        self.httpd = ThreadingHTTPServer(("127.0.0.1", 0), SoapHandler)
        self.httpd.requests = []
        self._thread = threading.Thread(target=self.httpd.serve_forever, daemon=True)

    @property
    def requests(self):
        return self.httpd.requests

    def url(self, path: str) -> str:
        host, port = self.httpd.server_address[:2]
        return f"http://{host}:{port}{path}"

    def __enter__(self):
        self._thread.start()
        return self

    def __exit__(self, *exc):
        self.httpd.shutdown()
        self.httpd.server_close()
        self._thread.join()


def closed_port_url(path: str = "/") -> str:
    """URL of a local port nothing is listening on."""
    with closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}{path}"


def soap_headers_in_order(headers):
    """Pick the SOAP header pairs out of a captured header list, keeping order."""
    wanted = {"soapaction", "cache-control", "content-type"}
    return [(k, v) for k, v in headers if k.lower() in wanted]
