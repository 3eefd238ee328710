"""Unit tests for the Jinja2 layout registry."""

import pytest
from jinja2 import TemplateNotFound, UndefinedError

from rapport.contexts.formatting.registries import LayoutRegistry, html_layouts, latex_layouts


@pytest.mark.unit
def test_layouts_are_cached():
    registry = html_layouts()
    registry.clear_cache()

    assert not registry.is_cached("page.html")
    first = registry.get_layout("page.html")

    assert registry.is_cached("page.html")
    assert registry.get_layout("page.html") is first


@pytest.mark.unit
def test_missing_layout_raises():
    with pytest.raises(TemplateNotFound, match="nowhere"):
        html_layouts().get_layout("nowhere")


@pytest.mark.unit
def test_html_page_escapes_title():
    page = html_layouts().render("page.html", title="Q3 <draft>", style="", body="<p>x</p>")

    assert "<title>Q3 &lt;draft&gt;</title>" in page
    assert "<p>x</p>" in page
    assert "<style>" not in page


@pytest.mark.unit
def test_latex_layout_uses_latex_safe_delimiters():
    source = latex_layouts().render("document.tex", font_size=11, margin="2cm", title="", body="BODY")

    assert r"\documentclass[11pt]{article}" in source
    assert r"\usepackage[margin=2cm]{geometry}" in source
    assert r"\section*" not in source
    assert "BODY" in source


@pytest.mark.unit
def test_undefined_variables_fail_loudly(tmp_path):
    (tmp_path / "greeting.jinja").write_text("Hello {{ name }}")
    registry = LayoutRegistry(tmp_path)

    assert registry.render("greeting", name="reader") == "Hello reader"
    with pytest.raises(UndefinedError):
        registry.render("greeting")


@pytest.mark.unit
def test_layout_variable_may_be_called_layout_name(tmp_path):
    (tmp_path / "card.jinja").write_text("{{ layout_name }}/{{ name }}")
    registry = LayoutRegistry(tmp_path)

    assert registry.render("card", layout_name="inner", name="outer") == "inner/outer"
