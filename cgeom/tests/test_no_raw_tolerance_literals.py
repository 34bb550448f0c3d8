"""Every tolerance and size bound lives in cgeom/core/constants.py.

The scan works on Python tokens, so numbers quoted in docstrings and
comments are ignored while numeric literals in code are caught.
"""
import io
import pathlib
import re
import tokenize

import pytest

SCIENTIFIC = re.compile(r"^\d+(\.\d*)?[eE][-+]?\d+$")
# size bounds that must come from constants (axis count, naive bound, circle sides)
BOUNDS = {'36', '64'}
ALLOW_FILES = {'constants.py'}


def _source_files():
    root = pathlib.Path(__file__).resolve().parent.parent
    return root, sorted(p for p in root.rglob('*.py') if 'tests' not in p.parts)


def _offending_numbers(path):
    text = path.read_text(encoding='utf-8')
    for tok in tokenize.generate_tokens(io.StringIO(text).readline):
        if tok.type != tokenize.NUMBER:
            continue
        if SCIENTIFIC.match(tok.string) or tok.string in BOUNDS:
            yield tok.start[0], tok.string


def test_no_raw_tolerance_literals():
    root, files = _source_files()
    offenders = []
    for f in files:
        if f.name in ALLOW_FILES:
            continue
        for line, lit in _offending_numbers(f):
            offenders.append(f"{f.relative_to(root)}:{line}: {lit}")
    assert not offenders, "Raw tolerance / bound literals found (use cgeom.core.constants):\n" + '\n'.join(offenders)


@pytest.mark.parametrize('snippet, expected', [
    ("eps = 1e-9\n", ['1e-9']),
    ("tol = 2.5E-7\n", ['2.5E-7']),
    ("sides = 64\n", ['64']),
    ("x = 1.0  # about 1e-12 of slack\n", []),
    ('"""within 1e-9"""\n', []),
    ("dtype = 'float64'\n", []),
])
def test_scanner_sees_code_not_prose(tmp_path, snippet, expected):
    src = tmp_path / 'module.py'
    src.write_text(snippet, encoding='utf-8')
    assert [lit for _, lit in _offending_numbers(src)] == expected


def test_constants_module_holds_the_values():
    from cgeom.core import constants
    for name in constants.__all__:
        assert getattr(constants, name) > 0
