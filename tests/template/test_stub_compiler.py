"""Tests for the section-aware compiler."""

import pytest

from stache.template.compiler import compile_stubs
from stache.template.errors import MalformedDirectiveError, UnmatchedSectionError
from stache.template.nodes import (
    Attribute, ElementNode, InterpolatorNode, PartialNode, SectionNode, TextNode, TripleNode,
)
from stache.template.stubs import expand_text, stubs_from_nodes
from tests.infrastructure import el, text


def compile_text(source: str, preserve_whitespace: bool = False):
    return compile_stubs(expand_text(source), preserve_whitespace=preserve_whitespace)


class TestLeaves:

    def test_text(self):
        assert compile_text("Hello") == (TextNode("Hello"),)

    def test_interpolator(self):
        assert compile_text("{{name}}") == (InterpolatorNode("name", (), 0),)

    def test_triple(self):
        assert compile_text("{{{html}}}") == (TripleNode("html", (), 0),)

    def test_partial(self):
        assert compile_text("{{> footer}}") == (PartialNode("footer"),)

    def test_formatters(self):
        (node,) = compile_text("{{user.name | upper | truncate(10)}}")

        assert node.keypath == "user.name"
        assert node.formatters == ("upper", "truncate(10)")

    def test_level_is_passed_through(self):
        (node,) = compile_stubs(expand_text("{{x}}"), level=3)
        assert node.level == 3


class TestWhitespacePolicy:

    def test_whitespace_dropped(self):
        assert compile_text("  \n  ") == ()

    def test_whitespace_preserved(self):
        assert compile_text("  \n  ", preserve_whitespace=True) == (TextNode("  \n  "),)

    def test_empty_text_dropped(self):
        assert compile_text("") == ()

    def test_text_with_content_kept_verbatim(self):
        assert compile_text("  a  ") == (TextNode("  a  "),)


class TestSections:

    def test_simple_section(self):
        (section,) = compile_text("{{#show}}Hi {{name}}{{/show}}")

        assert section == SectionNode(
            keypath="show",
            formatters=(),
            inverted=False,
            children=(TextNode("Hi "), InterpolatorNode("name", (), 1)),
            level=0,
        )

    def test_inverted_section(self):
        (section,) = compile_text("{{^items}}Nothing{{/items}}")

        assert section.inverted
        assert section.children == (TextNode("Nothing"),)

    def test_text_around_section(self):
        nodes = compile_text("a{{#s}}b{{/s}}c")

        assert nodes[0] == TextNode("a")
        assert isinstance(nodes[1], SectionNode)
        assert nodes[2] == TextNode("c")

    def test_same_keypath_reopen_nests(self):
        (outer,) = compile_text("{{#a}}x{{#a}}y{{/a}}z{{/a}}")

        assert outer.keypath == "a"
        assert outer.level == 0
        assert outer.children[0] == TextNode("x")
        inner = outer.children[1]
        assert isinstance(inner, SectionNode)
        assert inner.keypath == "a"
        assert inner.level == 1
        assert inner.children == (TextNode("y"),)
        assert outer.children[2] == TextNode("z")

    def test_inverted_reopen_counts_towards_depth(self):
        (outer,) = compile_text("{{#a}}{{^a}}n{{/a}}{{/a}}")

        assert not outer.inverted
        (inner,) = outer.children
        assert inner.inverted
        assert inner.children == (TextNode("n"),)

    def test_different_keypaths_nest(self):
        (outer,) = compile_text("{{#a}}{{#b}}x{{/b}}{{/a}}")

        (inner,) = outer.children
        assert inner.keypath == "b"
        assert inner.level == 1
        assert inner.children == (TextNode("x"),)

    def test_sibling_sections(self):
        nodes = compile_text("{{#a}}1{{/a}}{{#a}}2{{/a}}")

        assert [n.children for n in nodes] == [(TextNode("1"),), (TextNode("2"),)]

    def test_section_formatters(self):
        (section,) = compile_text("{{#items | sorted}}x{{/items}}")

        assert section.keypath == "items"
        assert section.formatters == ("sorted",)

    def test_empty_section(self):
        (section,) = compile_text("{{#a}}{{/a}}")
        assert section.children == ()

    def test_unmatched_section(self):
        with pytest.raises(UnmatchedSectionError) as info:
            compile_text("{{#a}}no close")

        assert info.value.keypath == "a"
        assert not info.value.stray_close
        assert "no close" in str(info.value)

    def test_unmatched_inner_section(self):
        with pytest.raises(UnmatchedSectionError) as info:
            compile_text("{{#a}}{{#b}}{{/a}}")

        assert info.value.keypath == "b"

    def test_stray_close(self):
        with pytest.raises(UnmatchedSectionError, match="Unexpected closing section 'a'") as info:
            compile_text("x{{/a}}")

        assert info.value.stray_close

    def test_close_with_other_keypath_is_stray(self):
        with pytest.raises(UnmatchedSectionError):
            compile_text("{{#a}}{{/b}}{{/a}}")

    def test_deterministic(self):
        source = "{{#a}}{{#b}}{{c | f}}{{/b}}{{^a}}{{{d}}}{{/a}}{{/a}}"
        assert compile_text(source) == compile_text(source)


class TestElements:

    def test_scenario_paragraph_with_section(self):
        nodes = compile_stubs(stubs_from_nodes([el("p", text("{{#show}}Hi {{name}}{{/show}}"))]))

        (para,) = nodes
        assert isinstance(para, ElementNode)
        assert para.tag == "p"
        assert para.level == 0
        (section,) = para.children
        assert section.keypath == "show"
        assert not section.inverted
        assert section.level == 1
        assert section.children == (TextNode("Hi "), InterpolatorNode("name", (), 2))

    def test_section_spanning_elements(self):
        stubs = stubs_from_nodes([
            text("{{#items}}"),
            el("li", text("{{name}}")),
            text("{{/items}}"),
        ])

        (section,) = compile_stubs(stubs, level=1)
        (item,) = section.children
        assert item.tag == "li"
        assert item.level == 2
        assert item.children == (InterpolatorNode("name", (), 3),)

    def test_whitespace_between_elements(self):
        stubs = stubs_from_nodes([el("ul", text("\n  "), el("li", text("a")), text("\n"))])

        (ul,) = compile_stubs(stubs)
        assert [c.tag for c in ul.children] == ["li"]

        (ul,) = compile_stubs(stubs, preserve_whitespace=True)
        assert [c.tag for c in ul.children] == ["li"]

    def test_compiler_is_reusable(self, stub_compiler):
        stubs = stubs_from_nodes([el("p", text("{{#a}}{{b}}{{/a}}"))])

        first = stub_compiler.compile(stubs)
        assert stub_compiler.compile(stubs) == first
        assert first[0].children == (SectionNode("a", (), False, (InterpolatorNode("b", (), 2),), 1),)

    def test_section_inside_element_drops_whitespace(self):
        stubs = stubs_from_nodes([el("p", text("{{#a}} {{/a}}"))])

        (para,) = compile_stubs(stubs, preserve_whitespace=True)
        assert para.children == (SectionNode("a", (), False, (), 1),)

    def test_section_body_inherits_whitespace_policy(self):
        stubs = stubs_from_nodes([text("{{#a}} "), el("br"), text(" {{/a}}")])

        (section,) = compile_stubs(stubs, preserve_whitespace=True)
        assert section.children[0] == TextNode(" ")
        assert section.children[1].tag == "br"
        assert section.children[2] == TextNode(" ")

    def test_static_attributes(self):
        (node,) = compile_stubs(stubs_from_nodes([el("div", id="main", class_="box")]))

        assert node.attributes == (
            Attribute(name="id", value="main"),
            Attribute(name="class", value="box"),
        )

    def test_dynamic_attribute_level(self):
        (node,) = compile_stubs(stubs_from_nodes([el("a", href="/u/{{id}}")]), level=2)

        (href,) = node.attributes
        assert href.is_dynamic
        assert href.level == 3
        assert href.components == (TextNode("/u/"), InterpolatorNode("id", (), 3))

    def test_xmlns_sets_namespace_for_descendants(self):
        svg = "http://www.w3.org/2000/svg"
        tree = el(
            "svg",
            el("g", el("circle", r="{{r}}")),
            attributes=(("xmlns", svg), ("width", "10")),
        )

        (node,) = compile_stubs(stubs_from_nodes([tree]))

        assert node.namespace == svg
        assert [a.name for a in node.attributes] == ["width"]
        (group,) = node.children
        assert group.namespace == svg
        (circle,) = group.children
        assert circle.namespace == svg

    def test_descendant_overrides_namespace(self):
        tree = el(
            "svg",
            el("foreignObject", el("div", attributes=(("xmlns", "http://www.w3.org/1999/xhtml"),))),
            attributes=(("xmlns", "http://www.w3.org/2000/svg"),),
        )

        (node,) = compile_stubs(stubs_from_nodes([tree]))
        (foreign,) = node.children
        (div,) = foreign.children
        assert foreign.namespace == "http://www.w3.org/2000/svg"
        assert div.namespace == "http://www.w3.org/1999/xhtml"

    def test_inherited_namespace_argument(self):
        (node,) = compile_stubs(stubs_from_nodes([el("rect")]), namespace="urn:x")
        assert node.namespace == "urn:x"

    def test_no_namespace_by_default(self):
        (node,) = compile_stubs(stubs_from_nodes([el("p")]))
        assert node.namespace is None


def test_unknown_stub_is_malformed():
    with pytest.raises(MalformedDirectiveError):
        compile_stubs([object()])
