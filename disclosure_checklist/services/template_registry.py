from template_data import ai_disclosure, aapor_transparency

DEFAULT_TEMPLATE_ID = "ai-disclosure"

QUESTION_TYPES = ("text", "textarea", "radio", "checkbox")


class FormTemplate:
    """
    Read-only wrapper around a template definition.
    Sections and questions stay plain dicts so they can be serialized as-is.
    """

    def __init__(self, definition):
        self.id = definition["id"]
        self.name = definition["name"]
        self.description = definition.get("description", "")
        self.sections = definition["sections"]
        self.section_groups = definition.get("section_groups", [])
        self.instance_noun = definition.get("instance_noun", "Instance")
        self.add_instance_label = definition.get("add_instance_label", "+ Add Another")
        self.instructions_heading = definition.get("instructions_heading", "")
        self.instructions = definition.get("instructions", [])
        self.visibility_rules = definition.get("visibility_rules", {})
        self.numbering_overrides = definition.get("numbering_overrides", {})
        self._sections_by_id = {section["id"]: section for section in self.sections}

    def get_section(self, section_id):
        return self._sections_by_id.get(section_id)

    def ordered_sections(self):
        """Yields (group, section) following the group order, skipping stale section ids."""
        for group in self.section_groups:
            for section_id in group["section_ids"]:
                section = self.get_section(section_id)
                if section is None:
                    continue
                yield group, section

    def is_visible(self, question_id, instance):
        rule = self.visibility_rules.get(question_id)
        if not rule:
            return True
        controller_id, required_value = rule
        return (instance or {}).get(controller_id) == required_value

    def question_number(self, question_id, index):
        return self.numbering_overrides.get(question_id, str(index + 1))

    def instance_label(self, index):
        return f"{self.instance_noun} {index + 1}"

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "sections": self.sections,
            "section_groups": self.section_groups,
            "instance_noun": self.instance_noun,
            "add_instance_label": self.add_instance_label,
            "instructions_heading": self.instructions_heading,
            "instructions": self.instructions,
            "visibility_rules": {k: list(v) for k, v in self.visibility_rules.items()},
            "numbering_overrides": self.numbering_overrides,
        }


_TEMPLATES = [
    FormTemplate(ai_disclosure.TEMPLATE),
    FormTemplate(aapor_transparency.TEMPLATE),
]


class TemplateRegistry:
    @staticmethod
    def list_templates():
        return list(_TEMPLATES)

    @staticmethod
    def get_template_by_id(template_id):
        for template in _TEMPLATES:
            if template.id == template_id:
                return template
        return None

    @staticmethod
    def get_section(template_id, section_id):
        template = TemplateRegistry.get_template_by_id(template_id)
        if not template:
            return None
        return template.get_section(section_id)
