"""CLI tests: stache.cli run as a subprocess."""

from tests.infrastructure import jload, run_cli


def test_compile_prints_json_ast(tmpproj):
    cp = run_cli(tmpproj, "compile", "page.html")

    assert cp.returncode == 0, cp.stderr
    (para,) = jload(cp.stdout)
    assert para["type"] == "element"
    assert para["tag"] == "p"
    assert para["attributes"][0]["name"] == "class"
    assert para["attributes"][0]["isDynamic"] is True
    (section,) = para["children"]
    assert section["type"] == "section"
    assert section["keypath"] == "show"
    assert section["children"][1] == {"type": "interpolator", "keypath": "name", "level": 2}


def test_compile_from_stdin(tmp_path):
    cp = run_cli(tmp_path, "compile", "-", stdin="Hi {{name}}")

    assert cp.returncode == 0, cp.stderr
    assert jload(cp.stdout) == [
        {"type": "text", "text": "Hi "},
        {"type": "interpolator", "keypath": "name", "level": 0},
    ]


def test_compile_preserve_whitespace_flag(tmp_path):
    cp = run_cli(tmp_path, "compile", "-", "--preserve-whitespace", stdin="{{#a}} {{/a}}")

    assert cp.returncode == 0, cp.stderr
    (section,) = jload(cp.stdout)
    assert section["children"] == [{"type": "text", "text": " "}]


def test_compile_error_exit_code(tmp_path):
    cp = run_cli(tmp_path, "compile", "-", stdin="{{#a}}no close")

    assert cp.returncode == 2
    assert "Unmatched section 'a'" in cp.stderr
    assert cp.stdout == ""


def test_strict_flag(tmp_path):
    cp = run_cli(tmp_path, "compile", "-", "--strict", stdin="{{{x}}")

    assert cp.returncode == 2
    assert "Unbalanced triple" in cp.stderr


def test_missing_template(tmp_path):
    cp = run_cli(tmp_path, "compile", "nope.html")

    assert cp.returncode == 2
    assert "Template file not found" in cp.stderr


def test_bad_config(tmp_path):
    (tmp_path / "stache.yaml").write_text("colour: blue\n", encoding="utf-8")
    cp = run_cli(tmp_path, "compile", "-", stdin="x")

    assert cp.returncode == 2
    assert "Unknown config keys" in cp.stderr


def test_strip_command(tmpproj):
    cp = run_cli(tmpproj, "strip", "page.html")

    assert cp.returncode == 0, cp.stderr
    assert cp.stdout.startswith('<p class="{{cls}}">')


def test_tokens_command(tmp_path):
    cp = run_cli(tmp_path, "tokens", "-", stdin="{{! c }}{{#a}}{{b | f}}{{/a}}")

    assert cp.returncode == 0, cp.stderr
    data = jload(cp.stdout)
    assert [(d["type"], d["keypath"]) for d in data] == [
        ("section", "a"), ("interpolator", "b"), ("section", "a"),
    ]
    assert data[1]["formatters"] == ["f"]
    assert data[2]["closing"] is True


def test_version(tmp_path):
    cp = run_cli(tmp_path, "--version")

    assert cp.returncode == 0
    assert cp.stdout.startswith("stache ")
