"""
JOHNNY Assembler Package
========================

This package provides an assembler for the JOHNNY educational computer and
helper utilities for loading RAM images.

Quick start:
    from johnny_assembly import assemble_file, JohnnyLoader

    # Simple usage
    ram = assemble_file("path/to/program.jasm")

    # With warnings
    loader = JohnnyLoader()
    ram = loader.assemble_file("path/to/program.jasm")
    print(loader.warnings)
"""

from johnny_assembly.jasm import (
    OPCODES,
    MEMORY_SIZE,
    JohnnyAssembler,
    EncodeError,
    UnknownOpcodeError,
    InvalidOperandError,
)
from johnny_assembly.johnny_loader import (
    JohnnyLoader,
    AssemblyError,
    assemble,
    assemble_file,
)

__all__ = [
    'OPCODES',
    'MEMORY_SIZE',
    'JohnnyAssembler',
    'EncodeError',
    'UnknownOpcodeError',
    'InvalidOperandError',
    'JohnnyLoader',
    'AssemblyError',
    'assemble',
    'assemble_file',
]

__version__ = '1.0.0'
