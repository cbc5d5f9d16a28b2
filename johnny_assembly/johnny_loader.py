#!/usr/bin/env python3
"""
JOHNNY Program Loader
=====================

Helper module to assemble JOHNNY programs and load RAM images for the
simulator or for tests.

Usage:
    from johnny_assembly.johnny_loader import JohnnyLoader

    loader = JohnnyLoader()
    ram = loader.assemble_file("path/to/program.jasm")

    # Or load a pre-assembled image
    ram = loader.load_image("path/to/output.ram")
"""

import sys
from typing import List, Optional, Sequence, Tuple

from johnny_assembly.jasm import (
    MEMORY_SIZE,
    Instruction,
    JohnnyAssembler,
    EncodeError,
    encode_instruction,
    split_lines,
)


class AssemblyError(Exception):
    """Exception raised when assembly or image loading fails."""
    pass


class JohnnyLoader:
    """Helper class for assembling and loading JOHNNY programs."""

    def __init__(self):
        self.assembler: Optional[JohnnyAssembler] = None
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def assemble(self, source: str) -> List[int]:
        """Assemble source code and return the RAM image.

        Args:
            source: Assembly source code as string

        Returns:
            List of MEMORY_SIZE words

        Raises:
            AssemblyError: If assembly fails
        """
        self.assembler = JohnnyAssembler()
        success = self.assembler.assemble(source)
        self.warnings = self.assembler.warnings
        if not success:
            self.errors = self.assembler.errors
            raise AssemblyError("Assembly failed:\n" + "\n".join(self.errors))

        self.errors = []
        return self.assembler.get_image()

    def assemble_file(self, filepath: str) -> List[int]:
        """Assemble a file and return the RAM image.

        Raises:
            FileNotFoundError: If file doesn't exist
            AssemblyError: If assembly fails
        """
        with open(filepath, 'r', encoding='utf-8-sig') as f:
            source = f.read()
        return self.assemble(source)

    def load_image(self, filepath: str) -> List[int]:
        """Load a pre-assembled .ram file.

        Files shorter than MEMORY_SIZE lines are padded with zeros and blank
        lines read as 0.

        Raises:
            AssemblyError: If the file is not a valid RAM image
        """
        with open(filepath, 'r', encoding='utf-8-sig') as f:
            lines = split_lines(f.read())

        if len(lines) > MEMORY_SIZE:
            raise AssemblyError(f"RAM image has {len(lines)} lines, expected at most {MEMORY_SIZE}")

        image = []
        for address, line in enumerate(lines):
            text = line.strip()
            if not text:
                image.append(0)
                continue
            try:
                image.append(int(text))
            except ValueError:
                raise AssemblyError(f"Invalid word \"{text}\" at address {address}") from None

        image.extend([0] * (MEMORY_SIZE - len(image)))
        return image

    def create_simple_program(self, instructions: Sequence[Tuple]) -> List[int]:
        """Create a RAM image from instruction tuples.

        Args:
            instructions: List of tuples (mnemonic, operand) or (mnemonic,)

        Example:
            ram = loader.create_simple_program([
                ('TAKE', 100),
                ('INC', 100),
                ('HLT',),
            ])
        """
        if len(instructions) > MEMORY_SIZE:
            raise ValueError(f"Program has {len(instructions)} instructions, memory holds {MEMORY_SIZE}")

        image = [0] * MEMORY_SIZE
        for address, item in enumerate(instructions):
            operand = str(item[1]) if len(item) > 1 else None
            try:
                image[address] = encode_instruction(Instruction(item[0], operand, address))
            except EncodeError as e:
                raise ValueError(str(e)) from e
        return image


# Convenience functions for quick use
def assemble(source: str) -> List[int]:
    """Quick assemble source code to a RAM image."""
    return JohnnyLoader().assemble(source)


def assemble_file(filepath: str) -> List[int]:
    """Quick assemble file to a RAM image."""
    return JohnnyLoader().assemble_file(filepath)


if __name__ == '__main__':
    import argparse

    parser = argparse.ArgumentParser(description='Test JOHNNY Loader')
    parser.add_argument('input', help='Input assembly file')
    args = parser.parse_args()

    loader = JohnnyLoader()
    try:
        ram = loader.assemble_file(args.input)
        used = [addr for addr, word in enumerate(ram) if word]
        print(f"Assembled {len(ram)} words, {len(used)} non-zero")
        print(f"First 16 words: {ram[:16]}")
    except (FileNotFoundError, AssemblyError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
