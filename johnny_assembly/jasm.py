#!/usr/bin/env python3
"""
JOHNNY Assembler
================

Assembler for the JOHNNY educational computer, generating the 1000-word RAM
image loaded by the JOHNNY simulator.

Usage:
    python jasm.py -i:program.jasm -o:output.ram
    python jasm.py --inputFile:program.jasm --outputFile:output.ram
"""

import argparse
import re
import sys
import time
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, List, Optional, Sequence


# =============================================================================
# Instruction Set Definition
# =============================================================================

# Base value of each instruction; the operand is added to it
OPCODES = MappingProxyType({
    'DATA':     0,
    'TAKE':  1000,
    'ADD':   2000,
    'SUB':   3000,
    'SAVE':  4000,
    'JMP':   5000,
    'TST':   6000,
    'INC':   7000,
    'DEC':   8000,
    'NULL':  9000,
    'HLT':  10000,
})

# Number of RAM cells in the JOHNNY machine
MEMORY_SIZE = 1000

DEFAULT_INPUT = 'program.jasm'
DEFAULT_OUTPUT = 'output.ram'

_SEPARATOR = re.compile(r'[ \t]+')
_NEWLINE = re.compile(r'\r\n|\r|\n')
_OPERAND = re.compile(r'[+-]?[0-9]+')


def lookup_opcode(mnemonic: str) -> Optional[int]:
    """Return the base value of a mnemonic, or None if it is unknown."""
    return OPCODES.get(mnemonic)


# =============================================================================
# Errors
# =============================================================================

class EncodeError(Exception):
    """Fatal error that stops the whole assembly."""

    def __init__(self, message: str, address: int):
        super().__init__(message)
        self.address = address


class UnknownOpcodeError(EncodeError):
    def __init__(self, mnemonic: str, address: int):
        super().__init__(f'Opcode "{mnemonic}" in line {address} is unknown. Terminating.', address)
        self.mnemonic = mnemonic


class InvalidOperandError(EncodeError):
    def __init__(self, token: str, address: int):
        super().__init__(f'Invalid parameter "{token}" in line {address}. Terminating.', address)
        self.token = token


# =============================================================================
# Data Structures
# =============================================================================

@dataclass
class Instruction:
    """Represents one tokenized source line."""
    mnemonic: str
    operand: Optional[str]
    address: int
    extra: List[str] = field(default_factory=list)

    @property
    def has_excess(self) -> bool:
        return bool(self.extra)


# =============================================================================
# Tokenizer / Encoder
# =============================================================================

def split_lines(source: str) -> List[str]:
    """Split source into lines on \\n, \\r and \\r\\n only.

    Other characters str.splitlines() treats as breaks (form feed, \\x85,
    \\u2028, ...) stay inside the line so addresses never shift. A final
    line terminator does not start a new line.
    """
    lines = _NEWLINE.split(source)
    if lines[-1] == '':
        lines.pop()
    return lines


def tokenize_line(line: str) -> List[str]:
    """Split a line on runs of spaces and tabs.

    The line is not trimmed first: a leading separator produces an empty
    first token, which means "no instruction at this address".
    """
    return _SEPARATOR.split(line)


def parse_line(line: str, address: int) -> Instruction:
    """Parse a source line into an Instruction."""
    tokens = tokenize_line(line)
    operand = tokens[1] if len(tokens) > 1 else None
    return Instruction(tokens[0], operand, address, tokens[2:])


def parse_operand(token: str, address: int) -> int:
    """Parse a base-10 signed integer operand."""
    if not _OPERAND.fullmatch(token):
        raise InvalidOperandError(token, address)
    return int(token)


def encode_instruction(instr: Instruction) -> int:
    """Encode an instruction into a single memory word.

    Args:
        instr: Parsed instruction

    Returns:
        Base value of the opcode plus the operand (0 when absent)

    Raises:
        UnknownOpcodeError: If the mnemonic is not in OPCODES
        InvalidOperandError: If the operand is not a decimal integer
    """
    if instr.mnemonic == '':
        return 0

    base = lookup_opcode(instr.mnemonic)
    if base is None:
        raise UnknownOpcodeError(instr.mnemonic, instr.address)

    if instr.operand is None:
        return base
    return base + parse_operand(instr.operand, instr.address)


def encode(tokens: Sequence[str], address: int) -> int:
    """Encode an already tokenized line. Tokens past the second are ignored."""
    tokens = list(tokens) or ['']
    operand = tokens[1] if len(tokens) > 1 else None
    return encode_instruction(Instruction(tokens[0], operand, address, tokens[2:]))


# =============================================================================
# Image Builder
# =============================================================================

def build_image(lines: Sequence[str],
                warn: Optional[Callable[[int, str], None]] = None) -> List[int]:
    """Build the full RAM image from source lines.

    Addresses without a source line hold 0. Lines past MEMORY_SIZE are
    ignored. Any EncodeError propagates and no image is returned.
    """
    image = []
    for address in range(MEMORY_SIZE):
        word = 0
        if address < len(lines):
            instr = parse_line(lines[address], address)
            if instr.has_excess and warn is not None:
                warn(address, "contains excessive parameters. Ignoring.")
            word = encode_instruction(instr)
        image.append(word)
    return image


def render_image(words: Sequence[int]) -> str:
    """Render words as decimal text, one per line."""
    return ''.join(f"{word}\n" for word in words)


# =============================================================================
# Assembler
# =============================================================================

class JohnnyAssembler:
    """Single-pass assembler for the JOHNNY computer."""

    def __init__(self):
        self.image: List[int] = []
        self.errors: List[str] = []
        self.warnings: List[str] = []
        self.failure: Optional[EncodeError] = None
        self.elapsed_ms: float = 0.0

    def warning(self, address: int, msg: str):
        """Record a warning."""
        self.warnings.append(f"Instruction in line {address} {msg}")

    def assemble(self, source: str) -> bool:
        """Assemble source code. Returns True on success."""
        self.image = []
        self.errors = []
        self.warnings = []
        self.failure = None

        lines = split_lines(source)
        start = time.perf_counter()
        try:
            image = build_image(lines, self.warning)
        except EncodeError as e:
            self.failure = e
            self.errors.append(str(e))
            return False
        finally:
            self.elapsed_ms = (time.perf_counter() - start) * 1000

        self.image = image
        return True

    def get_image(self) -> List[int]:
        """Get the assembled image as a list of words."""
        return list(self.image)

    def get_ram(self) -> str:
        """Get the assembled image in .ram text format."""
        return render_image(self.image)

    def write_ram(self, path: str):
        """Write the image to a .ram file. Only valid after a successful run."""
        if len(self.image) != MEMORY_SIZE:
            raise RuntimeError("No assembled image to write")
        with open(path, 'w', newline='\n') as f:
            f.write(self.get_ram())


# =============================================================================
# Main
# =============================================================================

# Option prefixes accepted on the command line
INPUT_PREFIXES = ('-i:', '--input:', '--inputFile:')
OUTPUT_PREFIXES = ('-o:', '--output:', '--outputFile:')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='jasm',
        description='Usage of the JOHNNY2 Assembly Compiler',
        usage='%(prog)s [--inputFile:PATH] [--outputFile:PATH]',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        epilog='''
Options:
  --inputFile:"path/to/file.jasm"   JOHNNY2 Assembly file to use (default: "program.jasm")
    Shorthands: -i, --input
  --outputFile:"path/to/file.ram"   Output file destination (default: "output.ram")
    Shorthands: -o, --output

Examples:
  %(prog)s -i:program.jasm -o:output.ram
  %(prog)s --input:count.jasm
'''
    )
    parser.add_argument('--input', dest='input', default=DEFAULT_INPUT, help=argparse.SUPPRESS)
    parser.add_argument('--output', dest='output', default=DEFAULT_OUTPUT, help=argparse.SUPPRESS)
    return parser


def _strip_prefix(arg: str, prefixes: Sequence[str]) -> Optional[str]:
    for prefix in prefixes:
        if arg.startswith(prefix):
            return arg[len(prefix):]
    return None


def parse_args(argv: Sequence[str]) -> Optional[argparse.Namespace]:
    """Parse colon style options. Returns None on any unrecognized argument."""
    parser = build_parser()
    normalized = []
    for arg in argv:
        value = _strip_prefix(arg, INPUT_PREFIXES)
        if value is not None:
            normalized.append(f'--input={value}')
            continue
        value = _strip_prefix(arg, OUTPUT_PREFIXES)
        if value is not None:
            normalized.append(f'--output={value}')
            continue
        return None
    return parser.parse_args(normalized)


def main(argv: Optional[Sequence[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    args = parse_args(argv)
    if args is None:
        build_parser().print_help()
        return 2

    in_name = args.input.strip('"')
    out_name = args.output.strip('"')

    # Read input
    try:
        with open(args.input, 'r', encoding='utf-8-sig') as f:
            source = f.read()
    except FileNotFoundError:
        print(f'Error: The provided input file "{in_name}" does not exist.', file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading {in_name}: {e}", file=sys.stderr)
        return 1

    # Assemble
    asm = JohnnyAssembler()
    success = asm.assemble(source)

    # Print warnings
    for warning in asm.warnings:
        print(f"Warning: {warning}", file=sys.stderr)

    # Print errors
    if not success:
        for error in asm.errors:
            print(f"Error: {error}", file=sys.stderr)
        return 1

    # Write output
    try:
        asm.write_ram(args.output)
    except OSError as e:
        print(f"Error writing {out_name}: {e}", file=sys.stderr)
        return 1

    print(f'Successfully compiled "{in_name}" to "{out_name}" in {int(asm.elapsed_ms)}ms')
    return 0


if __name__ == '__main__':
    sys.exit(main())
