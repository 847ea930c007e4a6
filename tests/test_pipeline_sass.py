"""
End-to-end tests against libsass.

Blank lines between rule blocks differ between compilers, so whole outputs
are compared through squash(); placeholder adjacency is checked on exact
line contents.
"""

import textwrap

import pytest

from sjx_sass import CompilationError, ConfigurationError, compile_fragment
from sjx_sass.placeholders import count_placeholders

from tests.infrastructure import ph, squash, write


def cleanup(text: str) -> str:
    return squash(textwrap.dedent(text))


def test_applies_nesting_and_functions():
    css = compile_fragment("p { img { display: block} color: rgba(red, 0.9) }")
    assert squash(css) == cleanup("""
        p {
          color: rgba(255, 0, 0, 0.9);
        }
        p img {
          display: block;
        }
    """)


def test_does_not_add_space_after_variable_placeholder():
    css = compile_fragment(f"p {{ img {{ color: {ph(0)}px; }} }}")
    assert squash(css) == cleanup(f"""
        p img {{
          color: {ph(0)}px;
        }}
    """)


def test_placeholders_in_css_functions():
    css = compile_fragment(f"div {{ grid-template-columns: repeat({ph(0)}); }}")
    assert squash(css) == cleanup(f"""
        div {{
          grid-template-columns: repeat({ph(0)});
        }}
    """)


def test_placeholders_in_nested_rules():
    css = compile_fragment(f"""
        p {{
          img {{ display: block }} color: {ph(0)}; border-bottom: 1px solid {ph(1)};
          em {{ color: {ph(2)} !important; }}
        }}
        {ph(1)}""")
    assert squash(css) == cleanup(f"""
        p {{
          color: {ph(0)};
          border-bottom: 1px solid {ph(1)};
        }}
        p img {{
          display: block;
        }}
        p em {{
          color: {ph(2)} !important;
        }}
        {ph(1)}
    """)


def test_placeholder_as_whole_declaration():
    css = compile_fragment(f"p {{ color: red; {ph(0)} }}")
    lines = squash(css).splitlines()
    assert lines[0] == "p {"
    assert "color: red;" in lines
    assert ph(0) in lines
    assert count_placeholders(css) == {0: 1}


def test_statement_placeholder_survives_compressed_output():
    css = compile_fragment(f"p {{ color: red; {ph(0)} }}\n{ph(1)}", {"output_style": "compressed"})
    assert count_placeholders(css) == {0: 1, 1: 1}
    assert "__sjx_" not in css


def test_reserved_identifier_in_source_is_rejected():
    with pytest.raises(ConfigurationError, match="__sjx_ph_7__"):
        compile_fragment("div { content: '__sjx_ph_7__'; }")


def test_mid_and_end_of_statement_placeholders():
    css = compile_fragment(f"""
        div {{
          border: {ph(0)}px solid {ph(1)};
          font-size: {ph(2)}px;
          margin: {ph(3)}% {ph(4)}%;
          padding-top: {ph(5)}%;
        }}
    """)
    lines = squash(css).splitlines()
    assert f"border: {ph(0)}px solid {ph(1)};" in lines
    assert f"font-size: {ph(2)}px;" in lines
    assert f"margin: {ph(3)}% {ph(4)}%;" in lines
    assert f"padding-top: {ph(5)}%;" in lines


def test_mid_statement_placeholder_keeps_following_values():
    css = compile_fragment(f"div {{ border: {ph(0)}px solid orangered; font-size: 16px; }}")
    assert squash(css) == cleanup(f"""
        div {{
          border: {ph(0)}px solid orangered;
          font-size: 16px;
        }}
    """)


def test_media_query_placeholders():
    css = compile_fragment(f"""
        p {{
          display: block;
          @media {ph(0)} {{ color: red; }}
          @media (min-width: {ph(0)}px) {{ color: blue; }}
          @media (min-width: {ph(0)}) {{ color: yellow; }}
        }}
    """)
    assert squash(css) == cleanup(f"""
        p {{
          display: block;
        }}
        @media {ph(0)} {{
          p {{
            color: red;
          }}
        }}
        @media (min-width: {ph(0)}px) {{
          p {{
            color: blue;
          }}
        }}
        @media (min-width: {ph(0)}) {{
          p {{
            color: yellow;
          }}
        }}
    """)


def test_selector_placeholders():
    css = compile_fragment(f"p {{ display: block; {ph(0)} {{ color: red; }} }}")
    assert squash(css) == cleanup(f"""
        p {{
          display: block;
        }}
        p {ph(0)} {{
          color: red;
        }}
    """)


def test_token_integrity():
    src = f"""
        p {{
          width: {ph(0)}px;
          margin: {ph(1)}% {ph(1)}%;
          {ph(2)} {{ color: {ph(3)}; }}
          @media {ph(4)} {{ height: calc(100% - {ph(5)}px); }}
        }}
    """
    assert count_placeholders(compile_fragment(src)) == count_placeholders(src)


def test_preamble_injects_variables_without_emitting_them():
    css = compile_fragment(
        "div { display: block; width: $gap; }",
        {"preamble": "$gap: 10px;"},
    )
    assert squash(css) == cleanup("""
        div {
          display: block;
          width: 10px;
        }
    """)
    assert "$gap" not in css


def test_indented_syntax():
    css = compile_fragment("body\n  display: block\n  margin: 0", {"dialect": "indented"})
    assert squash(css) == "body {\ndisplay: block;\nmargin: 0;\n}"


def test_indented_syntax_cleans_up_extra_indent():
    css = compile_fragment(
        """
          body
            display: block
            margin: 0
        """,
        {"dialect": "indented"},
    )
    assert squash(css) == "body {\ndisplay: block;\nmargin: 0;\n}"


def test_indented_syntax_with_preamble():
    css = compile_fragment(
        """
          div
            display: block
            width: $gap
        """,
        {"dialect": "indented", "preamble": "$gap: 10px"},
    )
    assert squash(css) == "div {\ndisplay: block;\nwidth: 10px;\n}"


def test_indented_syntax_inconsistent_indent():
    with pytest.raises(ConfigurationError):
        compile_fragment("    body\n  display: block\n", {"dialect": "indented"})


def test_output_style_option():
    css = compile_fragment(f"div {{ padding: {ph(0)}px; }}", {"output_style": "compressed"})
    assert css == f"div{{padding:{ph(0)}px}}"


def test_import_through_include_paths(tmp_path):
    write(tmp_path / "fixtures" / "_fixture.scss", "div { color: red; }\n")
    css = compile_fragment(
        '@import "fixture";\np { color: red }',
        {"include_paths": [str(tmp_path / "fixtures")]},
    )
    assert squash(css) == cleanup("""
        div {
          color: red;
        }
        p {
          color: red;
        }
    """)


def test_relative_import_through_context_file(tmp_path):
    write(tmp_path / "styles" / "_base.scss", "* { font-family: serif !important; }\n")
    entry = write(tmp_path / "styles" / "entry.scss", '@import "base";\np { color: red; }\n')
    css = compile_fragment(entry.read_text(encoding="utf-8"), {"context_file": str(entry)})
    assert squash(css) == cleanup("""
        * {
          font-family: serif !important;
        }
        p {
          color: red;
        }
    """)


def test_compilation_error_carries_position():
    with pytest.raises(CompilationError) as exc_info:
        compile_fragment("div {\n  color: $missing;\n}")
    assert exc_info.value.line == 2
    assert "$missing" in exc_info.value.message


def test_use_through_include_paths(tmp_path):
    write(tmp_path / "fixtures" / "_fixture.scss", "div { color: red; }\n")
    css = compile_fragment(
        '@use "fixture";\np { color: red }',
        {"include_paths": [str(tmp_path / "fixtures")]},
    )
    assert squash(css) == cleanup("""
        div {
          color: red;
        }
        p {
          color: red;
        }
    """)
    assert "@use" not in css


def test_relative_use_through_context_file(tmp_path):
    write(tmp_path / "styles" / "_base.scss", '* { font-family: "Comic Sans MS" !important; }\n')
    entry = write(tmp_path / "styles" / "entry.scss", '@use "base";\np { color: red; }\n')
    css = compile_fragment(entry.read_text(encoding="utf-8"), {"context_file": str(entry)})
    assert squash(css) == cleanup("""
        * {
          font-family: "Comic Sans MS" !important;
        }
        p {
          color: red;
        }
    """)


def test_namespaced_use_is_a_compilation_error(tmp_path):
    write(tmp_path / "_fixture.scss", "$c: red;\n")
    with pytest.raises(CompilationError, match="Unsupported @use rule"):
        compile_fragment(
            '@use "fixture" as fx;\np { color: fx.$c }',
            {"include_paths": [str(tmp_path)]},
        )
