"""Command line tool: decrypt advertised manufacturer data and report it."""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Iterable
from pathlib import Path

from vicblue.advert import (
    KEY_SIZE,
    Advertisement,
    KeyNotSetError,
    format_block,
    format_raw,
    lookup_key,
)
from vicblue.battery_monitor import decode_battery
from vicblue.console import Console
from vicblue.solar_controller import decode_solar

_DECODERS = {
    "battery": decode_battery,
    "solar": decode_solar,
}


def _parse_hex(text: str) -> bytes:
    cleaned = "".join(ch for ch in text if ch not in ":- \t")
    return bytes.fromhex(cleaned)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vicblue",
        description="Decrypt and report advertised device data given as hex.",
    )
    parser.add_argument("--device", required=True, choices=sorted(_DECODERS))
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--key", help="16-byte encryption key as hex")
    source.add_argument("--keys", type=Path, help="JSON file mapping device names to hex keys")
    parser.add_argument("--name", help="device name to look up in the keys file")
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument(
        "adverts",
        nargs="*",
        help="manufacturer data as hex; read from standard input when omitted",
    )
    return parser


def _resolve_key(args: argparse.Namespace) -> bytes:
    if args.key is not None:
        key = _parse_hex(args.key)
        if len(key) != KEY_SIZE:
            raise ValueError(f"key must be {KEY_SIZE} bytes, got {len(key)}")
        return key
    mapping = json.loads(args.keys.read_text(encoding="utf-8"))
    if not isinstance(mapping, dict):
        raise ValueError("keys file must hold a JSON object")
    keys = {str(name): _parse_hex(str(value)) for name, value in mapping.items()}
    return lookup_key(args.name, keys)


def _verbose_lines(advert: Advertisement, key: bytes) -> str:
    return (
        f"raw   : {format_raw(advert.data)}\n"
        f"key   : {format_block(key)}\n"
        f"salt  : {format_block(advert.iv)}\n"
        f"cipher: {format_block(advert.cipher)}\n"
    )


def _inputs(adverts: list[str]) -> Iterable[str]:
    if adverts:
        return adverts
    return (line.strip() for line in sys.stdin)


def main(argv: list[str] | None = None) -> int:
    """Run the tool; return the exit status."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.keys is not None and not args.name:
        parser.error("--keys requires --name")

    try:
        key = _resolve_key(args)
    except (KeyNotSetError, ValueError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    decode = _DECODERS[args.device]
    console = Console(verbose=args.verbose)
    status = 0
    for text in _inputs(args.adverts):
        if not text:
            continue
        if len(text) == 1:
            message = console.process_command(text)
            if message:
                sys.stdout.write(message)
            continue
        try:
            advert = Advertisement.from_bytes(_parse_hex(text))
        except ValueError as exc:
            print(f"error: {exc}", file=sys.stderr)
            status = 1
            continue
        if console.verbose:
            sys.stdout.write(_verbose_lines(advert, key))
        sys.stdout.write(decode(advert.decrypt(key)).report())
    return status