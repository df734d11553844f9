# main.py
from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import Sequence, TextIO

from config_reader import apply_setup, is_setup_line, load_config
from debug import COMPONENTS, Debug
from errors import ConfigError, EnigmaError
from machine import Machine
from suites import load_suite
from utilities import group_blocks

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────


debug = Debug()


@dataclass(slots=True)
class Config:
    """Runtime switches for one run of the simulator."""

    block: int = 5                          # display block size
    debug: tuple[str, ...] = ()             # components to log
    log_to: str | None = None               # extra log file


# ────────────────────────────────────────────────────────────────────────
#  1. Message processing
# ────────────────────────────────────────────────────────────────────────


def process(machine: Machine, source: TextIO, sink: TextIO, cfg: Config) -> None:
    """Run every line of `source` through `machine`, writing to `sink`.

    Setup lines reconfigure the machine; every other line is enciphered and
    written in blocks, one output line per input line.
    """
    configured = False
    for raw in source:
        line = raw.rstrip("\r\n")
        if is_setup_line(line):
            apply_setup(machine, line)
            configured = True
        elif configured:
            sink.write(group_blocks(machine.convert_message(line), cfg.block) + "\n")
        else:
            raise ConfigError("Input must begin with a setup line")


# ────────────────────────────────────────────────────────────────────────
#  2. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def _components(value: str) -> tuple[str, ...]:
    names = tuple(c.strip() for c in value.split(",") if c.strip())
    bad = [c for c in names if c not in COMPONENTS]
    if bad:
        raise argparse.ArgumentTypeError(
            f"unknown component {bad[0]!r} (choose from {', '.join(COMPONENTS)})"
        )
    return names


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Encrypt or decrypt with a rotor machine")
    src = p.add_mutually_exclusive_group()
    src.add_argument("-c", "--config", metavar="FILE", help="Machine description file.")
    src.add_argument("--suite", default="legacy", help="Built-in wheel set used when no --config is given. Default: legacy")
    p.add_argument("input", nargs="?", metavar="INPUT", help="Message file. Default: standard input")
    p.add_argument("output", nargs="?", metavar="OUTPUT", help="Result file. Default: standard output")
    p.add_argument("--block", type=int, default=5, help="Output group size. Default: 5")
    p.add_argument("--debug", type=_components, default=(), metavar="COMPONENTS", help="Comma-separated components to log, e.g. stepping,plugboard")
    p.add_argument("--log-file", dest="log_file", metavar="FILE", help="Also write log messages to FILE.")
    return p.parse_args(argv)


# ────────────────────────────────────────────────────────────────────────
#  3. Main entry point
# ────────────────────────────────────────────────────────────────────────


def run(args: argparse.Namespace) -> None:
    cfg = Config(block=args.block, debug=args.debug, log_to=args.log_file)
    if cfg.block < 1:
        raise ConfigError(f"Block size must be positive, got {cfg.block}")
    debug.toggle_global(bool(cfg.debug))
    if cfg.debug:
        Debug.configure(log_to=cfg.log_to)
        debug.enable(*cfg.debug)
        debug.log("config", f"logging {debug!r}")

    machine = load_config(args.config) if args.config else load_suite(args.suite)

    source = open(args.input, encoding="utf-8") if args.input else sys.stdin
    try:
        sink = open(args.output, "w", encoding="utf-8") if args.output else sys.stdout
        try:
            process(machine, source, sink, cfg)
        finally:
            if sink is not sys.stdout:
                sink.close()
    finally:
        if source is not sys.stdin:
            source.close()


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        run(args)
    except EnigmaError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: could not open {e.filename}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
