"""CLI entry point for unisegment (count, split, stream)."""
import argparse
import logging
import sys
from pathlib import Path

from unisegment.config import load_config
from unisegment.iterator import Graphemes
from unisegment.streaming import StreamSegmenter

logger = logging.getLogger(__name__)


def _open_input(path: str | None):
    if not path or path == "-":
        return sys.stdin.buffer
    return open(path, "rb")


def _read_input(args) -> bytes | None:
    """Read the whole input. None if the file does not exist."""
    path = getattr(args, "input", None)
    if path and path != "-" and not Path(path).is_file():
        print(f"No such file: {path}", file=sys.stderr)
        return None
    f = _open_input(path)
    try:
        return f.read()
    finally:
        if f is not sys.stdin.buffer:
            f.close()


def _format(text: str, args, span: tuple[int, int] | None = None) -> str:
    shown = repr(text) if args.escape else text
    if span is not None:
        return f"{span[0]}\t{span[1]}\t{shown}"
    return shown


def cmd_count(args):
    data = _read_input(args)
    if data is None:
        return 1
    g = Graphemes.from_bytes(data)
    n = 0
    while g.advance():
        n += 1
    print(n)
    return 0


def cmd_split(args):
    data = _read_input(args)
    if data is None:
        return 1
    show_positions = args.positions or args.config.get("show_positions", False)
    sep = args.config.get("separator", "\n")
    g = Graphemes.from_bytes(data)
    out = sys.stdout
    while g.advance():
        span = g.current_byte_range() if show_positions else None
        out.write(_format(g.current_text(), args, span) + sep)
    return 0


def cmd_stream(args):
    path = args.input
    if path and path != "-" and not Path(path).is_file():
        print(f"No such file: {path}", file=sys.stderr)
        return 1
    chunk_size = max(1, args.chunk_size or int(args.config.get("chunk_size", 4096)))
    show_positions = args.positions or args.config.get("show_positions", False)
    sep = args.config.get("separator", "\n")
    seg = StreamSegmenter()
    out = sys.stdout
    offset = 0

    def emit(clusters):
        nonlocal offset
        for cluster in clusters:
            span = (offset, offset + len(cluster)) if show_positions else None
            offset += len(cluster)
            out.write(_format(cluster.decode("utf-8", "replace"), args, span) + sep)

    f = _open_input(path)
    try:
        while True:
            chunk = f.read(chunk_size)
            if not chunk:
                break
            emit(seg.push(chunk))
    finally:
        if f is not sys.stdin.buffer:
            f.close()
    emit(seg.finish())
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="unisegment", description="Grapheme cluster segmentation")
    p.add_argument("--config", dest="config_path", default=None, help="YAML config file")
    sub = p.add_subparsers(dest="cmd", required=True)
    # count
    count_p = sub.add_parser("count", help="Count grapheme clusters")
    count_p.add_argument("input", nargs="?", default="-")
    count_p.set_defaults(func=cmd_count)
    # split
    split_p = sub.add_parser("split", help="Print one cluster per line")
    split_p.add_argument("input", nargs="?", default="-")
    split_p.add_argument("--positions", action="store_true", help="Prefix UTF-8 byte range")
    split_p.add_argument("--escape", action="store_true", help="Print clusters as Python literals")
    split_p.set_defaults(func=cmd_split)
    # stream
    stream_p = sub.add_parser("stream", help="Segment input chunk by chunk")
    stream_p.add_argument("input", nargs="?", default="-")
    stream_p.add_argument("--chunk-size", type=int, default=None)
    stream_p.add_argument("--positions", action="store_true", help="Prefix UTF-8 byte range")
    stream_p.add_argument("--escape", action="store_true", help="Print clusters as Python literals")
    stream_p.set_defaults(func=cmd_stream)
    return p


def main(argv=None):
    p = build_parser()
    args = p.parse_args(argv)
    args.config = load_config(args.config_path)
    logging.basicConfig(level=args.config.get("log_level", "WARNING"), format="%(levelname)s: %(message)s")
    logger.debug("Running %s with config %s", args.cmd, args.config)
    f = getattr(args, "func", None)
    if f is None:
        p.print_help()
        return 0
    return f(args) or 0


if __name__ == "__main__":
    sys.exit(main())
