import pytest

from sjx_sass.compiler import Compiler, LibsassCompiler, parse_error_position
from sjx_sass.config.model import CompileOptions, Dialect
from sjx_sass.errors import CompilationError

from tests.infrastructure import EchoCompiler, squash, write


def _compile(source, *, dialect=Dialect.BLOCK, include_paths=(), **opts):
    return LibsassCompiler().compile(
        source,
        dialect=dialect,
        include_paths=include_paths,
        options=CompileOptions(**opts),
    )


def test_protocol_is_satisfied():
    assert isinstance(LibsassCompiler(), Compiler)
    assert isinstance(EchoCompiler(), Compiler)


@pytest.mark.parametrize(
    "message, expected",
    [
        ('Error: Undefined variable: "$x".\n        on line 3:14 of stdin\n>> a', (3, 14)),
        ("Error: something\n        on line 7 of stdin", (7, None)),
        ("Error: no position here", (None, None)),
    ],
)
def test_parse_error_position(message, expected):
    assert parse_error_position(message) == expected


def test_compiles_block_dialect():
    css = _compile("p { img { display: block } color: red }")
    assert squash(css) == "p {\ncolor: red;\n}\np img {\ndisplay: block;\n}"


def test_compiles_indented_dialect():
    css = _compile("body\n  display: block\n  margin: 0", dialect=Dialect.INDENTED)
    assert squash(css) == "body {\ndisplay: block;\nmargin: 0;\n}"


def test_output_style_is_forwarded():
    css = _compile("div { padding: 1em; }", output_style="compressed")
    assert css.strip() == "div{padding:1em}"


def test_include_paths_are_forwarded(tmp_path):
    write(tmp_path / "lib" / "_colors.scss", "$brand: red;\n")
    css = _compile('@import "colors";\na { color: $brand; }', include_paths=[str(tmp_path / "lib")])
    assert "color: red;" in css


def test_syntax_error_becomes_compilation_error():
    with pytest.raises(CompilationError) as exc_info:
        _compile("div { color: $nope; }")
    err = exc_info.value
    assert "$nope" in err.message
    assert err.line == 1
    assert str(err) == err.message
    assert err.__cause__ is not None


def test_missing_import_becomes_compilation_error():
    with pytest.raises(CompilationError):
        _compile('@import "definitely-not-there";\n')
