import pytest

from stache.config import CompilerOptions
from stache.template import StubCompiler, TemplateCompiler


@pytest.fixture
def stub_compiler() -> StubCompiler:
    """Compiler for stub sequences with default settings."""
    return StubCompiler()


@pytest.fixture
def compiler() -> TemplateCompiler:
    """Full pipeline compiler with default options."""
    return TemplateCompiler(CompilerOptions())


@pytest.fixture
def tmpproj(tmp_path):
    """Directory with a template and a stache.yaml next to it."""
    (tmp_path / "page.html").write_text(
        "{{! page header }}\n<p class=\"{{cls}}\">{{#show}}Hi {{name}}{{/show}}</p>\n",
        encoding="utf-8",
    )
    (tmp_path / "stache.yaml").write_text("preserve_whitespace: false\n", encoding="utf-8")
    return tmp_path
