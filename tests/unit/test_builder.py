"""Unit tests for building a ResumeDocument from JOBL text."""

import pytest

from srg.contexts.intake import (
    DiagnosticKind,
    MissingRequiredField,
    ParseError,
    WarningsAsErrors,
    parse_jobl,
)
from srg.contexts.templating import Job, SkillCategory

CONTACT = "[contact]\nname: Ada Example\n"


def kinds(result):
    return [diagnostic.kind for diagnostic in result.diagnostics]


@pytest.mark.unit
def test_contact_fields_are_collected():
    """Contact keys become contact fields; the name is required and set."""
    result = parse_jobl(CONTACT + "email: ada@example.com\nHeadline: Engineer\n")

    assert result.document.name == "Ada Example"
    assert result.document.contact["email"] == "ada@example.com"
    assert result.document.contact["headline"] == "Engineer"
    assert result.diagnostics == ()


@pytest.mark.unit
def test_contact_is_immutable():
    """The built document cannot be changed afterwards."""
    document = parse_jobl(CONTACT).document

    with pytest.raises(TypeError):
        document.contact["name"] = "Someone Else"


@pytest.mark.unit
def test_section_aliases():
    """[person] and [work] map onto contact and experience."""
    result = parse_jobl("[person]\nname: A\n[work]\ntitle: Dev\ncompany: Acme\n")

    assert result.document.name == "A"
    assert result.document.experience == (
        Job(title="Dev", organization="Acme", date_range="", highlights=()),
    )


@pytest.mark.unit
def test_jobs_keep_source_order_and_fields():
    """Each title opens a job; scalars and list items attach to the latest job."""
    text = CONTACT + (
        "[experience]\n"
        "title: First\norganization: One\nstart: 2019\nend: 2020\n- a\n- b\n"
        "title: Second\ncompany: Two\ndates: 2020 - now\nhighlight: c\n"
    )
    jobs = parse_jobl(text).document.experience

    assert [job.title for job in jobs] == ["First", "Second"]
    assert jobs[0].organization == "One"
    assert jobs[0].date_range == "2019 - 2020"
    assert jobs[0].highlights == ("a", "b")
    assert jobs[1].date_range == "2020 - now"
    assert jobs[1].highlights == ("c",)


@pytest.mark.unit
def test_skill_categories_explicit_and_shorthand():
    """Skills accept 'category:' with items and the 'Name: a, b' shorthand."""
    text = CONTACT + "[skills]\nLanguages: Python, Rust\ncategory: Tools\n- Docker\nitems: Git, Make\n"
    skills = parse_jobl(text).document.skills

    assert skills == (
        SkillCategory(name="Languages", items=("Python", "Rust")),
        SkillCategory(name="Tools", items=("Docker", "Git", "Make")),
    )


@pytest.mark.unit
def test_projects_and_education():
    """Projects and education entries are opened by their primary field."""
    text = CONTACT + (
        "[projects]\nname: srg\nurl: example.com/srg\n- fast\n"
        "[education]\nschool: Uni\ndegree: BSc\nperiod: 2010 - 2014\n- honours\n"
    )
    document = parse_jobl(text).document

    assert document.projects[0].name == "srg"
    assert document.projects[0].link == "example.com/srg"
    assert document.projects[0].highlights == ("fast",)
    assert document.education[0].institution == "Uni"
    assert document.education[0].credential == "BSc"
    assert document.education[0].date_range == "2010 - 2014"
    assert document.education[0].details == ("honours",)


@pytest.mark.unit
def test_empty_section_is_kept_empty():
    """A header with no entries yields an empty section, not an error."""
    result = parse_jobl(CONTACT + "[skills]\n")

    assert result.document.skills == ()
    assert result.diagnostics == ()


@pytest.mark.unit
def test_missing_name_is_fatal_and_points_at_contact_header():
    """A document without contact.name raises at the [contact] line."""
    with pytest.raises(MissingRequiredField) as excinfo:
        parse_jobl("# header\n[contact]\nemail: a@b.c\n[skills]\nLanguages: Python\n")

    assert excinfo.value.field_name == "contact.name"
    assert excinfo.value.line_number == 2
    assert str(excinfo.value) == "line 2: missing required field 'contact.name'"


@pytest.mark.unit
def test_missing_contact_section_points_at_last_line():
    """Without any contact header the error points at the end of input."""
    with pytest.raises(ParseError) as excinfo:
        parse_jobl("[skills]\nLanguages: Python\n")

    assert excinfo.value.line_number == 2


@pytest.mark.unit
def test_empty_input_is_missing_name():
    """Empty input cannot produce a resume."""
    with pytest.raises(MissingRequiredField) as excinfo:
        parse_jobl(b"")

    assert excinfo.value.line_number == 1


@pytest.mark.unit
def test_unknown_section_warns_once_and_skips_its_lines():
    """Lines under an unknown section are ignored with a single warning."""
    text = CONTACT + "[hobbies]\nname: Climbing\n- weekends\nnonsense line\n[skills]\nLanguages: Python\n"
    result = parse_jobl(text)

    assert kinds(result) == [DiagnosticKind.UNKNOWN_SECTION]
    assert result.diagnostics[0].line_number == 3
    assert result.document.skills == (SkillCategory(name="Languages", items=("Python",)),)


@pytest.mark.unit
def test_orphan_field_before_first_entry():
    """A field that needs an open entry is reported and ignored."""
    result = parse_jobl(CONTACT + "[experience]\ncompany: Acme\n- did things\ntitle: Dev\n")

    assert kinds(result) == [DiagnosticKind.ORPHAN_FIELD, DiagnosticKind.ORPHAN_FIELD]
    assert [d.line_number for d in result.diagnostics] == [4, 5]
    assert result.document.experience[0].organization == ""
    assert result.document.experience[0].highlights == ()


@pytest.mark.unit
def test_content_before_any_header_is_orphaned():
    """Key/value lines before the first header are reported once per line."""
    result = parse_jobl("name: Early\n" + CONTACT)

    assert kinds(result) == [DiagnosticKind.ORPHAN_FIELD]
    assert result.diagnostics[0].line_number == 1
    assert result.document.name == "Ada Example"


@pytest.mark.unit
def test_malformed_unknown_empty_and_duplicate_warnings():
    """Recoverable problems become warnings with their line numbers."""
    text = CONTACT + (
        "name: Ada Lovelace\n"  # line 3, duplicate
        "just words\n"  # line 4, malformed
        "phone:\n"  # line 5, empty
        "[experience]\n"
        "title: Dev\n"
        "salary: lots\n"  # line 8, unknown field
    )
    result = parse_jobl(text)

    assert [(d.line_number, d.kind) for d in result.diagnostics] == [
        (3, DiagnosticKind.DUPLICATE_FIELD),
        (4, DiagnosticKind.MALFORMED_LINE),
        (5, DiagnosticKind.EMPTY_VALUE),
        (8, DiagnosticKind.UNKNOWN_FIELD),
    ]
    assert result.document.name == "Ada Lovelace"
    assert "phone" not in result.document.contact
    assert all(not d.is_fatal for d in result.diagnostics)


@pytest.mark.unit
def test_empty_primary_field_does_not_open_entry():
    """An empty title is reported and following fields are orphans."""
    result = parse_jobl(CONTACT + "[experience]\ntitle:\ncompany: Acme\n")

    assert kinds(result) == [DiagnosticKind.EMPTY_VALUE, DiagnosticKind.ORPHAN_FIELD]
    assert result.document.experience == ()


@pytest.mark.unit
def test_list_item_in_contact_is_orphan():
    result = parse_jobl(CONTACT + "- stray\n")

    assert kinds(result) == [DiagnosticKind.ORPHAN_FIELD]


@pytest.mark.unit
def test_diagnostic_string_format():
    """Diagnostics print as 'line N: severity: message [kind]'."""
    result = parse_jobl(CONTACT + "[hobbies]\n")

    assert str(result.diagnostics[0]).startswith("line 3: warning: unknown section '[hobbies]'")
    assert str(result.diagnostics[0]).endswith("[unknown-section]")


@pytest.mark.unit
def test_raise_for_warnings():
    """Strict mode turns collected warnings into one error."""
    clean = parse_jobl(CONTACT)
    noisy = parse_jobl(CONTACT + "[hobbies]\n")

    clean.raise_for_warnings()
    with pytest.raises(WarningsAsErrors) as excinfo:
        noisy.raise_for_warnings()

    assert excinfo.value.line_number == 3
    assert len(excinfo.value.diagnostics) == 1


@pytest.mark.unit
def test_parsing_is_deterministic():
    """The same bytes always build an equal document with equal diagnostics."""
    text = (CONTACT + "[skills]\nLanguages: Python\n[hobbies]\n").encode("utf-8")

    assert parse_jobl(text) == parse_jobl(text)


@pytest.mark.unit
def test_inline_arrays_fill_list_fields():
    """Inline arrays add one item per element, for skills and highlights alike."""
    text = (
        '[person]\nname = "Ada"\n'
        '[skills]\nLanguages = ["Rust", "Python"]\n'
        '[[experience]]\ntitle = "Eng"\ncompany = "Initech"\nhighlights = ["Built X", "Did Y"]\n'
    )
    result = parse_jobl(text)

    assert result.diagnostics == ()
    assert result.document.skills == (SkillCategory(name="Languages", items=("Rust", "Python")),)
    assert result.document.experience[0].highlights == ("Built X", "Did Y")


@pytest.mark.unit
def test_inline_array_items_keep_commas():
    """Array elements are never split further on commas."""
    text = CONTACT + '[projects]\nname: srg\nhighlights = ["Fast, small", "Typed"]\n'

    assert parse_jobl(text).document.projects[0].highlights == ("Fast, small", "Typed")


@pytest.mark.unit
def test_invalid_inline_array_warns_and_keeps_text():
    result = parse_jobl(CONTACT + "[experience]\ntitle: Dev\nhighlights = [unquoted, words]\n")

    assert kinds(result) == [DiagnosticKind.MALFORMED_LINE]
    assert result.document.experience[0].highlights == ("[unquoted, words]",)


@pytest.mark.unit
def test_array_for_single_value_field_is_rejected():
    result = parse_jobl(CONTACT + '[experience]\ntitle: Dev\ncompany = ["A", "B"]\n')

    assert kinds(result) == [DiagnosticKind.MALFORMED_LINE]
    assert result.document.experience[0].organization == ""


@pytest.mark.unit
def test_table_fields_attach_in_any_order():
    """Inside [[experience]] tables the title may come after other fields."""
    title_first = CONTACT + (
        "[[experience]]\ntitle: T1\ncompany: C1\n- one\n"
        "[[experience]]\ntitle: T2\ncompany: C2\n"
    )
    title_last = CONTACT + (
        "[[experience]]\ncompany: C1\n- one\ntitle: T1\n"
        "[[experience]]\ncompany: C2\ntitle: T2\n"
    )
    first = parse_jobl(title_first)
    last = parse_jobl(title_last)

    assert last.diagnostics == ()
    assert last.document == first.document
    assert last.document.experience == (
        Job(title="T1", organization="C1", highlights=("one",)),
        Job(title="T2", organization="C2"),
    )


@pytest.mark.unit
def test_table_without_primary_field_is_dropped():
    """A table that never names its entry is reported at its header line."""
    text = CONTACT + "[[projects]]\nlink: example.com\n[[projects]]\nname: kept\n"
    result = parse_jobl(text)

    assert kinds(result) == [DiagnosticKind.ORPHAN_FIELD]
    assert result.diagnostics[0].line_number == 3
    assert [project.name for project in result.document.projects] == ["kept"]


@pytest.mark.unit
def test_table_closed_by_end_of_input():
    result = parse_jobl(CONTACT + "[[education]]\ndegree: BSc\ninstitution: Uni\n")

    assert result.document.education[0].institution == "Uni"
    assert result.document.education[0].credential == "BSc"


@pytest.mark.unit
def test_repeated_primary_field_in_table():
    result = parse_jobl(CONTACT + "[[experience]]\ntitle: A\ntitle: B\n")

    assert kinds(result) == [DiagnosticKind.DUPLICATE_FIELD]
    assert result.document.experience[0].title == "B"


@pytest.mark.unit
def test_job_technologies():
    """Technologies accept an inline array, comma-separated text or list lines."""
    text = CONTACT + (
        '[experience]\ntitle: A\ntechnologies = ["Rust", "Tokio"]\n'
        "title: B\ntechnologies: Python, Django\n"
    )
    jobs = parse_jobl(text).document.experience

    assert jobs[0].technologies == ("Rust", "Tokio")
    assert jobs[1].technologies == ("Python", "Django")
    assert jobs[0].highlights == ()


@pytest.mark.unit
def test_skill_categories_without_items_are_dropped():
    """Empty categories are reported and omitted, leaving an empty skills section."""
    result = parse_jobl(CONTACT + "[skills]\nLanguages:\ncategory: Tools\n")

    assert [(d.line_number, d.kind) for d in result.diagnostics] == [
        (4, DiagnosticKind.EMPTY_VALUE),
        (5, DiagnosticKind.EMPTY_VALUE),
    ]
    assert result.document.skills == ()


@pytest.mark.unit
def test_shorthand_category_followed_by_list_items_is_kept():
    result = parse_jobl(CONTACT + "[skills]\nLanguages:\n- Python\n")

    assert result.diagnostics == ()
    assert result.document.skills == (SkillCategory(name="Languages", items=("Python",)),)


@pytest.mark.unit
def test_diagnostics_are_in_line_order():
    """Warnings raised when a table closes are still reported in source order."""
    text = CONTACT + "[[projects]]\nlink: example.com\n[skills]\nLanguages:\nbogus line\n"
    result = parse_jobl(text)

    assert [d.line_number for d in result.diagnostics] == [3, 6, 7]
