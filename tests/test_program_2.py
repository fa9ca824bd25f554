from pathlib import Path

from lox import run_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_2_shadowing(capsys):
    # an inner declaration hides the outer binding without changing it
    with open(EXAMPLES / 'program_2.lox', 'r', encoding='utf-8') as f:
        source = f.read()
    reporter = run_program(source)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['2', '1']
    assert not reporter.had_error
    assert not reporter.had_runtime_error
