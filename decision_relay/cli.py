"""CLI entry point for the decision relay."""

import argparse
import json
import logging
import sys
from typing import List, Optional, Sequence

from .api.client import DecisionRelay
from .config.settings import RelayConfig
from .core.context import decode_environment
from .errors import RelayError


def parse_env_pairs(pairs: Sequence[str]) -> dict:
    """Turn ``KEY=VALUE`` arguments into an environment mapping."""
    environment = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {pair!r}")
        environment[key] = value
    return environment


def probe(env_pairs: Sequence[str], debug: bool = False) -> int:
    """Run one cycle against the configured endpoint and print the response."""
    config = RelayConfig.from_env()
    relay = DecisionRelay(config)

    query = {config.debug_param: "1"} if debug else {}
    result = relay.handle(parse_env_pairs(env_pairs), query)

    sink = result.sink
    print(f"Action: {result.action.kind.value} (terminal={result.action.terminal})")
    print(f"Status: {sink.status_code}")
    for name, value in sink.headers:
        print(f"{name}: {value}")
    if sink.body:
        print()
        print(sink.body)
    return 0


def decode_context(blob: str) -> int:
    """Print a decoded context blob as JSON."""
    print(json.dumps(decode_environment(blob), indent=2))
    return 0


def serve(host: str, port: int) -> int:
    """Run the standalone relay app with uvicorn."""
    import uvicorn

    from .http.api import create_app

    uvicorn.run(create_app(RelayConfig.from_env()), host=host, port=port, log_level="info")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI function."""
    parser = argparse.ArgumentParser(description="Decision Relay CLI")
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Serve command
    serve_parser = subparsers.add_parser('serve', help='Run the relay as an HTTP server')
    serve_parser.add_argument('--host', default='127.0.0.1', help='Bind address')
    serve_parser.add_argument('--port', type=int, default=8000, help='Bind port')

    # Probe command
    probe_parser = subparsers.add_parser('probe', help='Run one cycle against the endpoint')
    probe_parser.add_argument('--env', action='append', default=[], metavar='KEY=VALUE',
                              help='Request environment entry (repeatable)')
    probe_parser.add_argument('--debug', action='store_true', help='Print the diagnostic trace')

    # Decode command
    decode_parser = subparsers.add_parser('decode-context', help='Decode a context blob')
    decode_parser.add_argument('blob', help='Base64 context blob')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    try:
        if args.command == 'serve':
            return serve(args.host, args.port)
        elif args.command == 'probe':
            return probe(args.env, args.debug)
        elif args.command == 'decode-context':
            return decode_context(args.blob)
        else:
            parser.print_help()
            return 1
    except (RelayError, argparse.ArgumentTypeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
