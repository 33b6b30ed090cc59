from __future__ import annotations

import argparse
import contextlib
import sys
from typing import BinaryIO, Dict, Iterator, List, Optional

from pgparmor.cleartext import hash_algorithm_from_name
from pgparmor.crc24 import crc24
from pgparmor.errors import ArmorError
from pgparmor.headers import ArmorConfig
from pgparmor.writer import ArmoredWriter, classify_first_byte, packet_tag


_READ_SIZE = 64 * 1024


def _parse_headers(pairs: Optional[List[str]]) -> Dict[str, str]:
    headers: Dict[str, str] = {}
    for item in pairs or []:
        name, sep, value = item.partition("=")
        name = name.strip()
        if not sep or not name:
            raise ValueError(f"invalid header {item!r}; expected NAME=VALUE")
        headers[name] = value.strip()
    return headers


def _config(crlf: bool, version: Optional[str]) -> ArmorConfig:
    kw = {"newline": "\r\n" if crlf else "\n"}
    if version is not None:
        kw["version"] = version
    return ArmorConfig(**kw)


@contextlib.contextmanager
def _open_input(path: str) -> Iterator[BinaryIO]:
    if path == "-":
        yield sys.stdin.buffer
    else:
        with open(path, "rb") as fh:
            yield fh


@contextlib.contextmanager
def _open_output(path: Optional[str]) -> Iterator[BinaryIO]:
    if path is None or path == "-":
        yield sys.stdout.buffer
    else:
        with open(path, "wb") as fh:
            yield fh


def _copy(src: BinaryIO, w: ArmoredWriter) -> int:
    total = 0
    while True:
        buf = src.read(_READ_SIZE)
        if not buf:
            break
        total += w.write(buf)
    return total


def cmd_armor(
    input_path: str,
    output: Optional[str] = None,
    *,
    headers: Optional[Dict[str, str]] = None,
    crlf: bool = False,
    version: Optional[str] = None,
) -> int:
    """Armor a binary OpenPGP file.

    Args:
        input_path: File to read, or "-" for stdin.
        output: File to write, or None/"-" for stdout.
        headers: Extra armor headers, emitted after Version.
        crlf: Use CRLF line endings instead of LF.
        version: Override the Version header value.

    Returns:
        Number of payload bytes armored.
    """
    with _open_input(input_path) as src, _open_output(output) as dst:
        w = ArmoredWriter(dst, headers, config=_config(crlf, version))
        total = _copy(src, w)
        if total == 0:
            w.open_block()
        w.close()
    return total


def cmd_clearsign_text(
    input_path: str,
    hash_algo: str,
    output: Optional[str] = None,
    *,
    crlf: bool = False,
) -> int:
    """Emit the clear-signed preamble and the dash-escaped text body.

    The detached signature block has to be appended by the signer.
    """
    algorithm = hash_algorithm_from_name(hash_algo)
    with _open_input(input_path) as src, _open_output(output) as dst:
        w = ArmoredWriter(dst, config=_config(crlf, None))
        w.begin_clear_text(algorithm)
        total = _copy(src, w)
        w.end_clear_text()
        dst.flush()
    return total


def cmd_info(input_path: str) -> bool:
    with _open_input(input_path) as src:
        data = src.read()
    print(f"Input: {input_path}")
    print(f"  Bytes: {len(data)}")
    if data:
        tag = packet_tag(data[0])
        framing = "new" if data[0] & 0x40 else "old"
        print(f"  Packet tag: {tag} ({framing} format)")
        print(f"  Label: {classify_first_byte(data[0])}")
    else:
        print("  Label: (empty input)")
    print(f"  CRC24: {crc24(data):06X}")
    return True


def main(argv: List[str] | None = None):
    ap = argparse.ArgumentParser(
        prog="pgparmor",
        description="OpenPGP ASCII armor encoder",
        epilog="Armor is written with LF line endings unless --crlf is given.",
    )
    sub = ap.add_subparsers(dest="cmd", required=True)

    ap_armor = sub.add_parser("armor", help="Armor a binary OpenPGP file")
    ap_armor.add_argument("input", help="Input file ('-' for stdin)")
    ap_armor.add_argument("-o", "--output", help="Output file (default: stdout)")
    ap_armor.add_argument(
        "-H", "--header", action="append", metavar="NAME=VALUE", help="Extra armor header (repeatable)"
    )
    ap_armor.add_argument("--version-string", help="Value for the Version header")
    ap_armor.add_argument("--crlf", action="store_true", help="Use CRLF line endings")

    ap_clear = sub.add_parser("clearsign-text", help="Write the clear-signed text part of a message")
    ap_clear.add_argument("input", help="Text file ('-' for stdin)")
    ap_clear.add_argument("--hash", required=True, help="Hash algorithm name (e.g. SHA256)")
    ap_clear.add_argument("-o", "--output", help="Output file (default: stdout)")
    ap_clear.add_argument("--crlf", action="store_true", help="Use CRLF line endings for the preamble")

    ap_info = sub.add_parser("info", help="Show the label and checksum a file would armor with")
    ap_info.add_argument("input", help="Input file ('-' for stdin)")

    args = ap.parse_args(argv)
    try:
        if args.cmd == "armor":
            cmd_armor(
                args.input,
                args.output,
                headers=_parse_headers(args.header),
                crlf=args.crlf,
                version=args.version_string,
            )
        elif args.cmd == "clearsign-text":
            cmd_clearsign_text(args.input, args.hash, args.output, crlf=args.crlf)
        elif args.cmd == "info":
            cmd_info(args.input)
        else:
            raise RuntimeError("Unknown command")
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except (ArmorError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
