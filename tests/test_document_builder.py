import pytest

from services.document_builder import DocumentBuilder, MODE_DETAILED, MODE_SUMMARY, NOT_ANSWERED, NO_ANSWER
from services.form_session import FormSession, FormSnapshot
from services.template_registry import TemplateRegistry


@pytest.fixture
def ai_template():
    return TemplateRegistry.get_template_by_id("ai-disclosure")


def section_ids(document):
    return [section.section_id for _, section in document.iter_sections()]


def find_section(document, section_id):
    for _, section in document.iter_sections():
        if section.section_id == section_id:
            return section
    return None


def test_unknown_mode_rejected(ai_template):
    with pytest.raises(ValueError):
        DocumentBuilder(ai_template, mode="bullet-points")


def test_sections_follow_group_order(ai_template):
    document = DocumentBuilder(ai_template).build(FormSnapshot("T", "ai-disclosure"))
    assert [g.title for g in document.groups] == ["Immediate Disclosures", "Core/Enhanced Questions"]
    assert section_ids(document) == [
        "tasks-performed", "human-oversight", "human-respondents-disclosure",
        "model-details", "access-tooling-details", "core-prompts", "additional-enhanced-disclosures",
    ]


class TestDetailed:

    def test_unanswered_required_question_is_marked(self, ai_template):
        session = FormSession()
        session.set_answer(0, "tasks-performed", "q1", "used for drafting")
        session.set_answer(0, "tasks-performed", "q2", "")

        document = DocumentBuilder(ai_template, MODE_DETAILED, include_empty=True).build(session.to_snapshot())
        lines = find_section(document, "tasks-performed").instances[0].lines
        assert [(line.question_id, line.display_answer) for line in lines] == [
            ("q1", "used for drafting"),
            ("q2", NOT_ANSWERED),
        ]
        assert lines[1].heading.endswith(" *")
        assert lines[0].heading.startswith("1. ")

    def test_include_empty_false_keeps_only_answered_lines(self, ai_template):
        session = FormSession()
        session.set_answer(0, "tasks-performed", "q1", "used for drafting")
        session.set_answer(0, "tasks-performed", "q2", "  ")

        document = DocumentBuilder(ai_template, MODE_DETAILED, include_empty=False).build(session.to_snapshot())
        lines = find_section(document, "tasks-performed").instances[0].lines
        assert [line.question_id for line in lines] == ["q1"]

    def test_include_empty_false_omits_sections_without_answers(self, ai_template):
        snapshot = FormSnapshot("T", "ai-disclosure", {"q1": "drafting"})
        document = DocumentBuilder(ai_template, MODE_DETAILED, include_empty=False).build(snapshot)
        assert section_ids(document) == ["tasks-performed"]
        # the second group has no sections left, so it disappears too
        assert [g.title for g in document.groups] == ["Immediate Disclosures"]

    def test_hidden_answer_does_not_keep_a_section(self, ai_template):
        # q9 has a stale answer but q8 no longer says "Yes"
        snapshot = FormSnapshot("T", "ai-disclosure", instances={"model-details": [{"q9": "old data"}]})
        document = DocumentBuilder(ai_template, MODE_DETAILED, include_empty=False).build(snapshot)
        assert find_section(document, "model-details") is None

    def test_gated_question_hidden_when_controller_is_no(self, ai_template):
        snapshot = FormSnapshot("T", "ai-disclosure", {"q8": "No", "q9": "leftover"})
        document = DocumentBuilder(ai_template, MODE_DETAILED).build(snapshot)
        lines = find_section(document, "model-details").instances[0].lines
        assert "q9" not in [line.question_id for line in lines]
        assert [line.number for line in lines] == ["1", "2", "3", "4", "5", "6", "7"]

    def test_gated_question_shown_with_override_number(self, ai_template):
        snapshot = FormSnapshot("T", "ai-disclosure", {"q8": "Yes", "q9": "Hugging Face dataset"})
        document = DocumentBuilder(ai_template, MODE_DETAILED).build(snapshot)
        lines = find_section(document, "model-details").instances[0].lines
        q9 = [line for line in lines if line.question_id == "q9"][0]
        assert q9.number == "4a"
        assert q9.answer == "Hugging Face dataset"

    def test_single_instance_is_not_labelled(self, ai_template):
        document = DocumentBuilder(ai_template).build(FormSnapshot("T", "ai-disclosure"))
        assert find_section(document, "tasks-performed").instances[0].label is None


class TestSummary:

    def test_answers_join_in_question_order(self, ai_template):
        snapshot = FormSnapshot("T", "ai-disclosure", {"q2": "B", "q1": "A"})
        document = DocumentBuilder(ai_template, MODE_SUMMARY).build(snapshot)
        assert find_section(document, "tasks-performed").instances[0].paragraph == "A B"

    def test_empty_instance_reads_no_answer(self, ai_template):
        document = DocumentBuilder(ai_template, MODE_SUMMARY).build(FormSnapshot("T", "ai-disclosure"))
        instance = find_section(document, "human-oversight").instances[0]
        assert instance.paragraph is None
        assert instance.display_paragraph == NO_ANSWER

    def test_hidden_question_does_not_contribute(self, ai_template):
        snapshot = FormSnapshot("T", "ai-disclosure", {"q7": "GPT-4o", "q8": "No", "q9": "leftover"})
        document = DocumentBuilder(ai_template, MODE_SUMMARY).build(snapshot)
        assert find_section(document, "model-details").instances[0].paragraph == "GPT-4o No"

    def test_only_second_instance_answered(self, ai_template):
        session = FormSession()
        session.add_instance("tasks-performed")
        session.set_answer(1, "tasks-performed", "q1", "second tool")

        document = DocumentBuilder(ai_template, MODE_SUMMARY, include_empty=False).build(session.to_snapshot())
        section = find_section(document, "tasks-performed")
        assert section is not None
        assert len(section.instances) == 1
        assert section.instances[0].label == "AI Tool 2"
        assert section.instances[0].paragraph == "second tool"


def test_aapor_group_has_no_title():
    template = TemplateRegistry.get_template_by_id("aapor-transparency")
    document = DocumentBuilder(template).build(FormSnapshot("T", "aapor-transparency"))
    assert len(document.groups) == 1
    assert document.groups[0].title == ""


def test_document_serializes(ai_template):
    data = DocumentBuilder(ai_template).build(FormSnapshot("T", "ai-disclosure", {"q1": "A"})).to_dict()
    first = data["groups"][0]["sections"][0]["instances"][0]["lines"][0]
    assert first == {"question_id": "q1", "number": "1", "label": first["label"], "required": True, "answer": "A"}
