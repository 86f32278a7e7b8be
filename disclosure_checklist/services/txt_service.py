from services.document_builder import MODE_SUMMARY


def underline(text, char):
    return f"{text}\n{char * len(text)}\n"


class TxtService:
    @staticmethod
    def render_text(document):
        text = underline(document.title, "=") + "\n"

        for group in document.groups:
            if group.title:
                text += "\n" + underline(group.title.upper(), "=")

            for section in group.sections:
                text += "\n" + underline(section.title.strip(), "-")

                for instance in section.instances:
                    if instance.label:
                        text += f"\n[{instance.label}]\n"

                    if document.mode == MODE_SUMMARY:
                        text += instance.display_paragraph + "\n"
                        continue

                    for line in instance.lines:
                        text += f"\n{line.heading}\n"
                        text += f"   {line.display_answer}\n"

        return text

    @staticmethod
    def render(document):
        return TxtService.render_text(document).encode("utf-8")
