#!/usr/bin/env python3
"""
Interactive CLI for the LRU cache
Drives a single in-memory cache from the shell and prints JSON results.

Usage:
    python -m lrucache.interactive_cache run put:1=one put:2=two get:1 --capacity 2
    python -m lrucache.interactive_cache shell --capacity 3
    lrucache stats
"""

import sys
import json
import logging
import argparse
from typing import Any, Dict, List, Optional, TextIO, Tuple

from .cache import LRUCache
from .config import load_config

logger = logging.getLogger("lrucache.cli")

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"


def parse_op(op: str) -> Tuple[str, str, Optional[str]]:
    """Parse a 'put:KEY=VALUE' or 'get:KEY' operation

    Returns:
        (command, key, value) with value None for get

    Raises:
        ValueError: if the operation is malformed
    """
    command, sep, rest = op.partition(":")
    if not sep:
        raise ValueError(f"Operation {op!r} is missing ':' (expected put:KEY=VALUE or get:KEY)")

    if command == "get":
        if not rest:
            raise ValueError(f"Operation {op!r} has an empty key")
        return "get", rest, None

    if command == "put":
        key, sep, value = rest.partition("=")
        if not sep or not key:
            raise ValueError(f"Operation {op!r} must look like put:KEY=VALUE")
        return "put", key, value

    raise ValueError(f"Unknown command {command!r} in operation {op!r}")


class CacheCLI:
    """CLI interface for cache operations"""

    def __init__(self, capacity: Optional[int] = None, copy_on_read: Optional[bool] = None):
        self.config = load_config({"capacity": capacity, "copy_on_read": copy_on_read})
        self.cache = LRUCache.from_config(self.config)

    def put(self, key: str, value: str) -> Dict[str, Any]:
        evictions_before = self.cache.stats.evictions
        self.cache.put(key, value)
        return {
            "op": "put",
            "key": key,
            "value": value,
            "evicted": self.cache.stats.evictions > evictions_before,
            "size": len(self.cache),
        }

    def get(self, key: str) -> Dict[str, Any]:
        found = key in self.cache
        return {"op": "get", "key": key, "found": found, "value": self.cache.get(key)}

    def stats(self) -> Dict[str, Any]:
        stats = self.cache.get_statistics()
        stats["problems"] = self.cache.validate()
        return stats

    def apply(self, op: str) -> Dict[str, Any]:
        command, key, value = parse_op(op)
        if command == "put":
            return self.put(key, value)
        return self.get(key)

    def run(self, ops: List[str]) -> Dict[str, Any]:
        """Apply a list of operations, stopping at the first malformed one"""
        results = []
        error = None
        for op in ops:
            try:
                results.append(self.apply(op))
            except ValueError as e:
                logger.error(f"Bad operation: {e}")
                error = str(e)
                break

        report = {"success": error is None, "results": results, "stats": self.stats()}
        if error:
            report["error"] = error
        return report

    def shell(self, stream: Optional[TextIO] = None, out: Optional[TextIO] = None) -> int:
        """Read commands line by line until EOF or quit"""
        stream = stream or sys.stdin
        out = out or sys.stdout
        for line in stream:
            parts = line.split(maxsplit=2)
            if not parts:
                continue

            command = parts[0].lower()
            if command in ("quit", "exit"):
                break

            if command == "put" and len(parts) == 3:
                result = self.put(parts[1], parts[2].rstrip("\r\n"))
            elif command == "get" and len(parts) == 2:
                result = self.get(parts[1])
            elif command == "stats" and len(parts) == 1:
                result = self.stats()
            else:
                logger.error(f"Unrecognised shell command: {line.strip()!r}")
                result = {"error": f"Unrecognised command: {line.strip()}",
                          "usage": "put KEY VALUE | get KEY | stats | quit"}

            print(json.dumps(result, default=str), file=out, flush=True)
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Interactive CLI for the LRU cache",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Run a sequence of operations:
    python -m lrucache.interactive_cache run put:1=one put:2=two put:3=three get:1 --capacity 2

  Start an interactive session:
    python -m lrucache.interactive_cache shell --capacity 3
        """
    )

    parser.add_argument("--capacity", type=int, help="Cache capacity (overrides LRU_CACHE_CAPACITY env var)")
    parser.add_argument("--no-copy", action="store_true", help="Return stored values without copying")
    parser.add_argument("--pretty", action="store_true", help="Pretty print JSON output")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging on stderr")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    run_parser = subparsers.add_parser("run", help="Apply operations to a fresh cache")
    run_parser.add_argument("ops", nargs="+", help="Operations: put:KEY=VALUE or get:KEY")

    subparsers.add_parser("shell", help="Read put/get/stats commands from stdin")
    subparsers.add_parser("stats", help="Show statistics of an empty cache built from config")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        cli = CacheCLI(capacity=args.capacity, copy_on_read=False if args.no_copy else None)
    except (TypeError, ValueError) as e:
        logger.error(f"Could not create cache: {e}")
        print(json.dumps({"success": False, "error": str(e)}))
        return 1

    # Logs go to stderr so stdout stays pure JSON
    level = logging.DEBUG if args.verbose else getattr(logging, cli.config["log_level"], logging.WARNING)
    logging.basicConfig(level=level, stream=sys.stderr, format=LOG_FORMAT)

    indent = 2 if args.pretty else None

    if args.command == "shell":
        return cli.shell()

    if args.command == "run":
        result = cli.run(args.ops)
        print(json.dumps(result, indent=indent, default=str))
        return 0 if result["success"] else 1

    print(json.dumps(cli.stats(), indent=indent, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
