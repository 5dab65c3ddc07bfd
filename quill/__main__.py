from argparse import ArgumentParser, Namespace
from contextlib import nullcontext
from json import JSONDecodeError, dumps, loads
from logging import DEBUG as DEBUG_LV
from logging import INFO
from pathlib import Path
from sys import exit, stdin

from pynvim_pp.logging import log
from std2.pickle.types import DecodeError

from .completion.locals import suggest_locals
from .consts import DEBUG
from .protocol.encode import encode_suggestions
from .settings.load import load_file
from .wire.parse import parse_request
from .wire.types import ValidationError


def _parse_args() -> Namespace:
    parser = ArgumentParser(prog="quill")

    sub_parsers = parser.add_subparsers(dest="command", required=True)

    with nullcontext(sub_parsers.add_parser("suggest")) as p:
        p.add_argument("input", nargs="?", type=Path)
        p.add_argument("--config", type=Path)
        p.add_argument("--indent", type=int)

    return parser.parse_args()


def main() -> int:
    log.setLevel(DEBUG_LV if DEBUG else INFO)
    args = _parse_args()

    try:
        settings = load_file(args.config)
        raw = args.input.read_text("UTF-8") if args.input else stdin.read()
        request = parse_request(loads(raw))
    except (OSError, JSONDecodeError, DecodeError, ValidationError) as e:
        log.warning("%s", e)
        return 1
    else:
        suggestions = suggest_locals(
            settings, source=request.source, declarations=request.declarations
        )
        print(dumps(encode_suggestions(suggestions), indent=args.indent))
        return 0


if __name__ == "__main__":
    exit(main())
