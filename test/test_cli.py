"""
Tests for the jasm command line.
"""

import pytest

from johnny_assembly.jasm import MEMORY_SIZE, main, parse_args


@pytest.fixture
def program(tmp_path):
    src = tmp_path / 'program.jasm'
    src.write_text("TAKE 5\nADD 3\nHLT\n")
    return src


@pytest.mark.parametrize('in_opt, out_opt', [
    ('-i:', '-o:'),
    ('--input:', '--output:'),
    ('--inputFile:', '--outputFile:'),
])
def test_option_spellings(in_opt, out_opt):
    args = parse_args([in_opt + 'a.jasm', out_opt + 'b.ram'])
    assert args.input == 'a.jasm'
    assert args.output == 'b.ram'


def test_defaults():
    args = parse_args([])
    assert args.input == 'program.jasm'
    assert args.output == 'output.ram'


def test_later_option_wins():
    args = parse_args(['-i:first.jasm', '--input:second.jasm'])
    assert args.input == 'second.jasm'


@pytest.mark.parametrize('argv', [['-h'], ['program.jasm'], ['-i', 'x.jasm'], ['--verbose']])
def test_unknown_argument_is_rejected(argv):
    assert parse_args(argv) is None


def test_compile(program, tmp_path, capsys):
    out = tmp_path / 'output.ram'
    assert main([f'-i:{program}', f'-o:{out}']) == 0

    lines = out.read_text().splitlines()
    assert len(lines) == MEMORY_SIZE
    assert lines[:3] == ['1005', '2003', '10000']
    assert set(lines[3:]) == {'0'}

    captured = capsys.readouterr()
    assert captured.out.startswith(f'Successfully compiled "{program}" to "{out}" in ')
    assert captured.out.rstrip().endswith('ms')


def test_compile_with_default_paths(program, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main([]) == 0
    assert (tmp_path / 'output.ram').read_text().startswith("1005\n2003\n10000\n0\n")


def test_unknown_argument_prints_help(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(['--bogus']) == 2
    assert 'JOHNNY2 Assembly Compiler' in capsys.readouterr().out
    assert not (tmp_path / 'output.ram').exists()


def test_missing_input(tmp_path, capsys):
    out = tmp_path / 'output.ram'
    assert main([f'-i:{tmp_path / "nope.jasm"}', f'-o:{out}']) == 1
    assert 'does not exist' in capsys.readouterr().err
    assert not out.exists()


def test_input_with_bom(tmp_path):
    src = tmp_path / 'bom.jasm'
    src.write_bytes(b'\xef\xbb\xbfTAKE 5\nHLT\n')
    out = tmp_path / 'output.ram'
    assert main([f'-i:{src}', f'-o:{out}']) == 0
    assert out.read_text().startswith("1005\n10000\n0\n")


def test_undecodable_input(tmp_path, capsys):
    src = tmp_path / 'binary.jasm'
    src.write_bytes(b'H\xffLT\n')
    out = tmp_path / 'output.ram'
    assert main([f'-i:{src}', f'-o:{out}']) == 1
    assert 'Error reading' in capsys.readouterr().err
    assert not out.exists()


def test_trailing_separator_without_operand_fails(tmp_path, capsys):
    src = tmp_path / 'trailing.jasm'
    src.write_text("HLT \n")
    out = tmp_path / 'output.ram'
    assert main([f'-i:{src}', f'-o:{out}']) == 1
    assert 'Invalid parameter ""' in capsys.readouterr().err
    assert not out.exists()


def test_unknown_opcode_writes_nothing(tmp_path, capsys):
    src = tmp_path / 'bad.jasm'
    src.write_text("FOO 1\n")
    out = tmp_path / 'output.ram'
    assert main([f'-i:{src}', f'-o:{out}']) == 1

    err = capsys.readouterr().err
    assert 'Error:' in err
    assert '"FOO"' in err
    assert 'line 0' in err
    assert not out.exists()


def test_failure_leaves_existing_output_untouched(tmp_path):
    src = tmp_path / 'bad.jasm'
    src.write_text("TAKE 1\nADD one\n")
    out = tmp_path / 'output.ram'
    out.write_text("previous\n")
    assert main([f'-i:{src}', f'-o:{out}']) == 1
    assert out.read_text() == "previous\n"


def test_excess_tokens_warn_but_compile(tmp_path, capsys):
    src = tmp_path / 'warn.jasm'
    src.write_text("TAKE 5 with a comment\nHLT\n")
    out = tmp_path / 'output.ram'
    assert main([f'-i:{src}', f'-o:{out}']) == 0

    captured = capsys.readouterr()
    assert 'Warning:' in captured.err
    assert 'line 0' in captured.err
    assert out.read_text().startswith("1005\n10000\n")
