import io

from docx import Document
from docx.shared import Pt, RGBColor, Inches
from flask import current_app

from services.document_builder import MODE_SUMMARY

MUTED = RGBColor(0x99, 0x99, 0x99)
BLACK = RGBColor(0x00, 0x00, 0x00)


class DocxService:
    @staticmethod
    def _muted_paragraph(doc, text, indent=False):
        paragraph = doc.add_paragraph()
        run = paragraph.add_run(text)
        run.italic = True
        run.font.color.rgb = MUTED
        if indent:
            paragraph.paragraph_format.left_indent = Inches(0.28)
        paragraph.paragraph_format.space_after = Pt(5)
        return paragraph

    @staticmethod
    def render(document):
        """Renders an ExportDocument into a .docx byte string."""
        current_app.logger.info(f"Rendering DOCX export '{document.title}' ({document.mode})")

        doc = Document()
        doc.add_heading(document.title, level=0)

        for group in document.groups:
            if group.title:
                doc.add_heading(group.title, level=1)

            for section in group.sections:
                doc.add_heading(section.title.strip(), level=2)

                for instance in section.instances:
                    if instance.label:
                        doc.add_heading(instance.label, level=3)

                    if document.mode == MODE_SUMMARY:
                        if instance.paragraph is None:
                            DocxService._muted_paragraph(doc, instance.display_paragraph)
                        else:
                            paragraph = doc.add_paragraph(instance.paragraph)
                            paragraph.paragraph_format.space_after = Pt(10)
                        continue

                    for line in instance.lines:
                        question = doc.add_paragraph()
                        question.paragraph_format.space_before = Pt(7)
                        question.add_run(line.heading).bold = True

                        if line.answer is None:
                            DocxService._muted_paragraph(doc, line.display_answer, indent=True)
                        else:
                            answer = doc.add_paragraph()
                            answer.paragraph_format.left_indent = Inches(0.28)
                            answer.paragraph_format.space_after = Pt(5)
                            answer.add_run(line.answer).font.color.rgb = BLACK

        buffer = io.BytesIO()
        doc.save(buffer)
        return buffer.getvalue()
