"""
Integration tests for the parse -> render pipeline.
Tests: JOBL bytes -> ResumeDocument -> HTML and layout tree stay consistent.
"""

from pathlib import Path

import pytest

from srg.contexts.intake import DiagnosticKind, MissingRequiredField, parse_file, parse_jobl
from srg.contexts.templating import render_resume

FIXTURES_PATH = Path(__file__).resolve().parent.parent / "fixtures"


def html_section_ids(html: str):
    """Section ids in document order, read back from the rendered page."""
    ids = []
    for marker in ('<header id="', '<section id="'):
        start = 0
        while (index := html.find(marker, start)) != -1:
            value_start = index + len(marker)
            ids.append((index, html[value_start:html.index('"', value_start)]))
            start = value_start
    return tuple(section_id for _, section_id in sorted(ids))


@pytest.mark.integration
def test_full_resume_renders_every_section():
    parsed = parse_file(FIXTURES_PATH / "full_resume.jobl")
    output = render_resume(parsed.document, "minimal")

    assert parsed.diagnostics == ()
    assert output.layout.section_ids == ("contact", "skills", "experience", "projects", "education")
    for text in ("Ada Example", "Initech", "Led the migration of the billing pipeline", "University of Lisbon"):
        assert text in output.html
        assert text in output.layout.text()


@pytest.mark.integration
def test_same_bytes_give_identical_html():
    data = (FIXTURES_PATH / "full_resume.jobl").read_bytes()

    first = render_resume(parse_jobl(data).document).html
    second = render_resume(parse_jobl(data).document).html

    assert first == second


@pytest.mark.integration
def test_reordering_highlights_only_reorders_them():
    """Swapping two highlight lines swaps them within their job and nothing else."""
    original = (FIXTURES_PATH / "full_resume.jobl").read_text()
    first = "- Led the migration of the billing pipeline\n"
    second = "- Cut p99 latency of the ledger API by 40%\n"
    swapped = original.replace(first + second, second + first)
    assert swapped != original

    html_a = render_resume(parse_jobl(original).document).html
    html_b = render_resume(parse_jobl(swapped).document).html

    line_a = "          <li>Led the migration of the billing pipeline</li>\n"
    line_b = "          <li>Cut p99 latency of the ledger API by 40%</li>\n"
    assert html_a.replace(line_a + line_b, line_b + line_a) == html_b


@pytest.mark.integration
def test_empty_and_missing_skills_render_identically():
    """An empty section and an absent section both produce no heading."""
    with_empty = render_resume(parse_jobl("[contact]\nname: A\n[skills]\n").document)
    without = render_resume(parse_jobl("[contact]\nname: A\n").document)

    assert with_empty.html == without.html
    assert with_empty.layout == without.layout
    assert 'id="skills"' not in without.html


@pytest.mark.integration
def test_script_in_content_is_escaped():
    text = "[contact]\nname: Eve\n[experience]\ntitle: <script>alert(1)</script>\n- <img src=x onerror=y>\n"
    output = render_resume(parse_jobl(text).document)

    assert "<script>" not in output.html
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in output.html
    assert "&lt;img src=x onerror=y&gt;" in output.html
    # The layout keeps raw text; escaping is the encoder's job
    assert "<script>alert(1)</script>" in output.layout.text()


@pytest.mark.integration
def test_missing_name_fails():
    with pytest.raises(MissingRequiredField) as excinfo:
        parse_file(FIXTURES_PATH / "missing_name.jobl")

    assert excinfo.value.line_number == 1


@pytest.mark.integration
def test_unknown_section_is_skipped_and_others_render():
    parsed = parse_file(FIXTURES_PATH / "with_hobbies.jobl")
    output = render_resume(parsed.document)

    assert [d.kind for d in parsed.diagnostics] == [DiagnosticKind.UNKNOWN_SECTION]
    assert parsed.diagnostics[0].line_number == 7
    assert "Climbing" not in output.html
    assert "Bouldering" not in output.html
    assert output.layout.section_ids == ("contact", "skills", "experience", "projects", "education")


@pytest.mark.integration
def test_minimal_document_has_two_headings():
    output = render_resume(parse_file(FIXTURES_PATH / "minimal.jobl").document)

    assert output.html.count('class="section-heading') == 2
    assert output.layout.section_ids == ("contact", "skills")
    headings = [block for block in output.layout.walk() if block.role in ("contact-name", "section-heading")]
    assert len(headings) == 2


@pytest.mark.integration
@pytest.mark.parametrize("fixture", ["full_resume.jobl", "minimal.jobl", "with_hobbies.jobl"])
def test_html_and_layout_list_the_same_sections(fixture):
    output = render_resume(parse_file(FIXTURES_PATH / fixture).document)

    assert html_section_ids(output.html) == output.layout.section_ids


@pytest.mark.integration
def test_field_order_inside_tables_does_not_change_output():
    """Swapping company and title inside [[experience]] tables renders the same page."""
    title_first = (
        '[person]\nname = "Ada"\n'
        '[[experience]]\ntitle = "T1"\ncompany = "C1"\nhighlights = ["Built X", "Did Y"]\n'
        '[[experience]]\ntitle = "T2"\ncompany = "C2"\n'
    )
    company_first = (
        '[person]\nname = "Ada"\n'
        '[[experience]]\ncompany = "C1"\ntitle = "T1"\nhighlights = ["Built X", "Did Y"]\n'
        '[[experience]]\ncompany = "C2"\ntitle = "T2"\n'
    )

    first = render_resume(parse_jobl(title_first).document)
    second = render_resume(parse_jobl(company_first).document)

    assert first.html == second.html
    assert first.layout == second.layout
    assert '<p class="entry-subheading">C1</p>' in second.html
    assert "<li>Did Y</li>" in second.html


@pytest.mark.integration
def test_inline_array_skills_render_as_items():
    text = '[person]\nname = "Ada"\n[skills]\nLanguages = ["Rust", "Python"]\n'
    output = render_resume(parse_jobl(text).document)

    assert '<span class="skills-items">Rust, Python</span>' in output.html
    assert "Languages: Rust, Python" in output.layout.text()
