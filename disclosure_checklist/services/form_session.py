import copy

from services.template_registry import TemplateRegistry, DEFAULT_TEMPLATE_ID

DEFAULT_FORM_TITLE = "Untitled Form"


def is_answered(value):
    return bool(value) and bool(str(value).strip())


def split_form_data(form_data):
    """Separates the persisted blob into (flat_answers, instances)."""
    form_data = dict(form_data or {})
    instances = form_data.pop("instances", None) or {}
    return form_data, instances


def merge_form_data(flat_answers, instances):
    # instances live inside the answer blob so one write updates both
    data = dict(flat_answers or {})
    data["instances"] = copy.deepcopy(instances or {})
    return data


class FormSnapshot:
    """The persisted/exported unit of one filled form."""

    def __init__(self, title, template_id, flat_answers=None, instances=None):
        self.title = title
        self.template_id = template_id
        self.flat_answers = dict(flat_answers or {})
        self.instances = copy.deepcopy(instances or {})

    def instances_for(self, section_id):
        stored = self.instances.get(section_id)
        if stored:
            return stored
        return [self.flat_answers]

    def to_form_data(self):
        return merge_form_data(self.flat_answers, self.instances)

    def to_dict(self):
        return {
            "title": self.title,
            "template_id": self.template_id,
            "form_data": self.to_form_data(),
        }

    @classmethod
    def from_payload(cls, payload):
        """Builds a snapshot from an API body or a stored record."""
        payload = payload or {}
        if "form_data" in payload:
            flat, instances = split_form_data(payload.get("form_data"))
        else:
            flat = payload.get("flat_answers") or {}
            instances = payload.get("instances") or {}
        return cls(
            title=payload.get("title") or DEFAULT_FORM_TITLE,
            template_id=payload.get("template_id") or DEFAULT_TEMPLATE_ID,
            flat_answers=flat,
            instances=instances,
        )


class FormSession:
    """
    Owns the in-memory state of one form being edited.
    Visibility is never cached here; it is derived from the template on read.
    """

    def __init__(self, template_id=DEFAULT_TEMPLATE_ID, title=DEFAULT_FORM_TITLE, flat_answers=None,
                 instances=None, form_id=None, public_id=None, is_public=False, author_name=None):
        self.template = TemplateRegistry.get_template_by_id(template_id)
        if self.template is None:
            raise ValueError(f"Unknown template: {template_id}")
        self.template_id = template_id
        self.title = title
        self.flat_answers = dict(flat_answers or {})
        self.instances = copy.deepcopy(instances or {})
        self.form_id = form_id
        self.public_id = public_id
        self.is_public = is_public
        self.author_name = author_name

    @classmethod
    def from_record(cls, record):
        flat, instances = split_form_data(record.get("form_data"))
        return cls(
            template_id=record.get("template_id") or DEFAULT_TEMPLATE_ID,
            title=record.get("title") or DEFAULT_FORM_TITLE,
            flat_answers=flat,
            instances=instances,
            form_id=record.get("id"),
            public_id=record.get("public_id"),
            is_public=bool(record.get("is_public")),
            author_name=record.get("author_name"),
        )

    def _require_section(self, section_id):
        section = self.template.get_section(section_id)
        if section is None:
            raise KeyError(f"Unknown section: {section_id}")
        return section

    def instances_for(self, section_id):
        stored = self.instances.get(section_id)
        if stored:
            return stored
        return [self.flat_answers]

    def _materialize(self, section_id):
        # a section without stored instances implicitly has one, backed by the flat answers
        if not self.instances.get(section_id):
            self.instances[section_id] = [dict(self.flat_answers)]
        return self.instances[section_id]

    def set_answer(self, instance_index, section_id, question_id, value):
        self._require_section(section_id)
        instances = self._materialize(section_id)
        if instance_index < 0 or instance_index >= len(instances):
            raise IndexError(f"No instance {instance_index} in section {section_id}")
        instances[instance_index] = dict(instances[instance_index], **{question_id: value})
        if instance_index == 0:
            self.flat_answers[question_id] = value

    def add_instance(self, section_id):
        self._require_section(section_id)
        instances = self._materialize(section_id)
        instances.append({})
        return len(instances)

    def remove_instance(self, section_id, index):
        self._require_section(section_id)
        if len(self.instances_for(section_id)) <= 1:
            return 1
        instances = self.instances[section_id]
        if 0 <= index < len(instances):
            instances.pop(index)
        return len(instances)

    def completion_status(self, section_id):
        """True when every instance has every required question answered."""
        section = self._require_section(section_id)
        for instance in self.instances_for(section_id):
            for question in section["questions"]:
                if question.get("required") and not is_answered(instance.get(question["id"])):
                    return False
        return True

    def completion_report(self):
        return {
            section["id"]: self.completion_status(section["id"])
            for _, section in self.template.ordered_sections()
        }

    def rename(self, title):
        self.title = title

    def to_snapshot(self):
        return FormSnapshot(self.title, self.template_id, self.flat_answers, self.instances)
