import pytest

from services.form_session import (
    FormSession, FormSnapshot, DEFAULT_FORM_TITLE, is_answered, split_form_data, merge_form_data
)


class TestFormData:

    def test_whitespace_is_not_an_answer(self):
        assert not is_answered(None)
        assert not is_answered("")
        assert not is_answered("   \n")
        assert is_answered("x")

    def test_instances_nest_inside_the_answer_blob(self):
        blob = merge_form_data({"q1": "a"}, {"tasks-performed": [{"q1": "a"}, {"q1": "b"}]})
        assert blob == {"q1": "a", "instances": {"tasks-performed": [{"q1": "a"}, {"q1": "b"}]}}

        flat, instances = split_form_data(blob)
        assert flat == {"q1": "a"}
        assert instances["tasks-performed"][1] == {"q1": "b"}

    def test_split_tolerates_missing_blob(self):
        assert split_form_data(None) == ({}, {})


class TestSnapshot:

    def test_sections_without_instances_fall_back_to_flat_answers(self):
        snapshot = FormSnapshot("T", "ai-disclosure", {"q1": "drafting"}, {"tasks-performed": []})
        assert snapshot.instances_for("tasks-performed") == [{"q1": "drafting"}]
        assert snapshot.instances_for("human-oversight") == [{"q1": "drafting"}]

    def test_stored_instances_are_authoritative(self):
        snapshot = FormSnapshot("T", "ai-disclosure", {"q1": "flat"}, {"tasks-performed": [{"q1": "one"}]})
        assert snapshot.instances_for("tasks-performed") == [{"q1": "one"}]

    def test_from_payload_accepts_persisted_shape(self):
        snapshot = FormSnapshot.from_payload({
            "title": "My Study",
            "template_id": "aapor-transparency",
            "form_data": {"q1": "x", "instances": {"panel": [{"q20": "Yes"}]}},
        })
        assert snapshot.title == "My Study"
        assert snapshot.flat_answers == {"q1": "x"}
        assert snapshot.instances == {"panel": [{"q20": "Yes"}]}

    def test_from_payload_defaults(self):
        snapshot = FormSnapshot.from_payload({"flat_answers": {"q1": "x"}})
        assert snapshot.title == DEFAULT_FORM_TITLE
        assert snapshot.template_id == "ai-disclosure"
        assert snapshot.instances == {}

    def test_single_instance_round_trip_keeps_keys(self):
        session = FormSession(flat_answers={"q1": "drafting", "q2": "coding"})
        record = {"id": "f1", "template_id": "ai-disclosure", "title": "T",
                  "form_data": session.to_snapshot().to_form_data()}
        reloaded = FormSession.from_record(record)
        assert reloaded.instances_for("tasks-performed") == [{"q1": "drafting", "q2": "coding"}]
        assert reloaded.flat_answers == {"q1": "drafting", "q2": "coding"}


class TestFormSession:

    def test_unknown_template_rejected(self):
        with pytest.raises(ValueError):
            FormSession(template_id="nope")

    def test_set_answer_on_first_instance_mirrors_flat_answers(self):
        session = FormSession()
        session.set_answer(0, "tasks-performed", "q1", "used for drafting")
        assert session.flat_answers["q1"] == "used for drafting"
        assert session.instances_for("tasks-performed") == [{"q1": "used for drafting"}]

    def test_set_answer_on_later_instance_leaves_flat_answers(self):
        session = FormSession()
        session.add_instance("tasks-performed")
        session.set_answer(1, "tasks-performed", "q1", "second tool")
        assert "q1" not in session.flat_answers
        assert session.instances_for("tasks-performed")[1] == {"q1": "second tool"}

    def test_set_answer_out_of_range(self):
        session = FormSession()
        with pytest.raises(IndexError):
            session.set_answer(3, "tasks-performed", "q1", "x")

    def test_unknown_section(self):
        session = FormSession()
        with pytest.raises(KeyError):
            session.add_instance("no-such-section")

    def test_add_instance_materializes_the_implicit_one(self):
        session = FormSession(flat_answers={"q1": "flat"})
        assert session.add_instance("tasks-performed") == 2
        assert session.instances["tasks-performed"] == [{"q1": "flat"}, {}]

    def test_remove_last_instance_is_a_no_op(self):
        session = FormSession()
        assert session.remove_instance("tasks-performed", 0) == 1
        assert session.instances == {}

        session.add_instance("tasks-performed")
        assert session.remove_instance("tasks-performed", 0) == 1
        assert session.remove_instance("tasks-performed", 0) == 1
        assert len(session.instances_for("tasks-performed")) == 1

    def test_remove_instance_drops_the_indexed_one(self):
        session = FormSession()
        session.add_instance("tasks-performed")
        session.add_instance("tasks-performed")
        session.set_answer(2, "tasks-performed", "q1", "third")
        assert session.remove_instance("tasks-performed", 1) == 2
        assert session.instances_for("tasks-performed")[1] == {"q1": "third"}

    def test_completion_requires_every_instance(self):
        session = FormSession()
        session.set_answer(0, "tasks-performed", "q1", "used for drafting")
        session.set_answer(0, "tasks-performed", "q2", "")
        assert session.completion_status("tasks-performed") is False

        session.set_answer(0, "tasks-performed", "q2", "coding open-ended responses")
        assert session.completion_status("tasks-performed") is True

        session.add_instance("tasks-performed")
        assert session.completion_status("tasks-performed") is False

    def test_optional_questions_do_not_block_completion(self):
        session = FormSession()
        assert session.completion_status("additional-enhanced-disclosures") is True

    def test_completion_report_covers_every_section(self):
        session = FormSession(template_id="aapor-transparency")
        report = session.completion_report()
        assert set(report) == {s["id"] for s in session.template.sections}
        assert not any(report.values())

    def test_snapshot_is_a_copy(self):
        session = FormSession()
        session.set_answer(0, "tasks-performed", "q1", "a")
        snapshot = session.to_snapshot()
        session.set_answer(0, "tasks-performed", "q1", "b")
        assert snapshot.instances_for("tasks-performed") == [{"q1": "a"}]
