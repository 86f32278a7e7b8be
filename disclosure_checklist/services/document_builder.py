from dataclasses import dataclass, field, asdict
from typing import List, Optional

from services.form_session import is_answered

MODE_DETAILED = "detailed"
MODE_SUMMARY = "summary"
EXPORT_MODES = (MODE_DETAILED, MODE_SUMMARY)

NOT_ANSWERED = "Not answered"
NO_ANSWER = "No answer"


@dataclass
class QuestionLine:
    question_id: str
    number: str
    label: str
    required: bool
    answer: Optional[str]

    @property
    def heading(self):
        return f"{self.number}. {self.label}{' *' if self.required else ''}"

    @property
    def display_answer(self):
        return self.answer if self.answer is not None else NOT_ANSWERED


@dataclass
class InstanceBlock:
    index: int
    label: Optional[str]
    lines: List[QuestionLine] = field(default_factory=list)
    paragraph: Optional[str] = None

    @property
    def display_paragraph(self):
        return self.paragraph if self.paragraph is not None else NO_ANSWER


@dataclass
class SectionBlock:
    section_id: str
    title: str
    summary: str
    instances: List[InstanceBlock] = field(default_factory=list)


@dataclass
class GroupBlock:
    title: str
    description: str
    sections: List[SectionBlock] = field(default_factory=list)


@dataclass
class ExportDocument:
    title: str
    template_name: str
    mode: str
    groups: List[GroupBlock] = field(default_factory=list)

    def iter_sections(self):
        for group in self.groups:
            for section in group.sections:
                yield group, section

    def to_dict(self):
        return asdict(self)


class DocumentBuilder:
    """
    Single traversal of template + snapshot shared by every renderer and the public view.
    Inclusion, numbering, visibility and instance labels are resolved here so the
    output formats cannot disagree on them.
    """

    def __init__(self, template, mode=MODE_DETAILED, include_empty=True):
        if mode not in EXPORT_MODES:
            raise ValueError(f"Unknown export mode: {mode}")
        self.template = template
        self.mode = mode
        self.include_empty = include_empty

    def build(self, snapshot):
        document = ExportDocument(title=snapshot.title, template_name=self.template.name, mode=self.mode)
        for group in self.template.section_groups:
            group_block = GroupBlock(title=group.get("title", ""), description=group.get("description", ""))
            for section_id in group["section_ids"]:
                section = self.template.get_section(section_id)
                if section is None:
                    continue
                block = self._build_section(section, snapshot.instances_for(section_id))
                if block is not None:
                    group_block.sections.append(block)
            if group_block.sections:
                document.groups.append(group_block)

        return document

    def visible_questions(self, section, instance):
        return [
            (index, question)
            for index, question in enumerate(section["questions"])
            if self.template.is_visible(question["id"], instance)
        ]

    def _build_section(self, section, instances):
        labelled = len(instances) > 1
        block = SectionBlock(section_id=section["id"], title=section["title"], summary=section.get("summary", ""))

        for index, instance in enumerate(instances):
            label = self.template.instance_label(index) if labelled else None
            if self.mode == MODE_SUMMARY:
                instance_block = self._summary_instance(section, instance, index, label)
            else:
                instance_block = self._detailed_instance(section, instance, index, label)
            if instance_block is not None:
                block.instances.append(instance_block)

        if not block.instances:
            return None
        return block

    def _detailed_instance(self, section, instance, index, label):
        block = InstanceBlock(index=index, label=label)
        answered = 0
        for position, question in self.visible_questions(section, instance):
            value = instance.get(question["id"])
            if is_answered(value):
                answered += 1
                answer = str(value)
            elif self.include_empty:
                answer = None
            else:
                continue
            block.lines.append(QuestionLine(
                question_id=question["id"],
                number=self.template.question_number(question["id"], position),
                label=question["label"].strip(),
                required=bool(question.get("required")),
                answer=answer,
            ))

        if not answered and not self.include_empty:
            return None
        return block

    def _summary_instance(self, section, instance, index, label):
        answers = [
            str(instance.get(question["id"])).strip()
            for _, question in self.visible_questions(section, instance)
            if is_answered(instance.get(question["id"]))
        ]
        if not answers and not self.include_empty:
            return None
        return InstanceBlock(index=index, label=label, paragraph=" ".join(answers) if answers else None)
