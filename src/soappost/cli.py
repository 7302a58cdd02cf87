import argparse
import json
import sys

from lxml import etree

from soappost.http.client.poster import SoapPoster
from soappost.http.errors import TransportSetupError
from soappost.util.serialize import make_envelope


def _read_payload(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    with open(path, "rb") as fh:
        return fh.read()


def main(argv=None):
    parser = argparse.ArgumentParser(description="POST a SOAP message to a web service.")
    parser.add_argument("url", help="Target web service URL")
    parser.add_argument(
        "payload",
        nargs="?",
        default=None,
        help="File holding the message ('-' for stdin). Omit to send no body.",
    )
    parser.add_argument(
        "--wrap",
        action="store_true",
        help="Wrap the payload in a SOAP 1.1 envelope",
    )
    parser.add_argument("--timeout", type=float, default=None, help="Timeout in seconds")
    # verbose
    parser.add_argument("--verbose", action="store_true", help="Verbose mode")
    # debug
    parser.add_argument("--debug", action="store_true", help="Debug mode")

    args = parser.parse_args(argv)

    if args.debug:
        from soappost import configure_logging
        configure_logging('DEBUG')

    payload = _read_payload(args.payload) if args.payload is not None else None
    if args.wrap and payload is not None:
        try:
            payload = make_envelope(payload)
        except (etree.XMLSyntaxError, ValueError) as exc:
            print(f"error: payload is not XML: {exc}", file=sys.stderr)
            return 2

    poster = SoapPoster(timeout=args.timeout, verbosity=True if args.verbose else None)
    try:
        result = poster.post(args.url, payload)
    except TransportSetupError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        print(
            json.dumps(
                {"status_code": result.status_code, "body": result.body},
                ensure_ascii=False,
            ),
            flush=True,
        )
    except BrokenPipeError:
        return 0
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
