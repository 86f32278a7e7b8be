from fpdf import FPDF
from fpdf.enums import XPos, YPos
from flask import current_app

from services.document_builder import MODE_SUMMARY

# Core PDF fonts only cover Latin-1
LATIN1_REPLACEMENTS = {
    '\u2013': '-', '\u2014': '-',
    '\u2018': "'", '\u2019': "'",
    '\u201c': '"', '\u201d': '"',
    '\u2022': '-', '\u2026': '...',
    '\u00a0': ' ', '\u200b': '',
}

ACCENT_RGB = (115, 107, 231)
MUTED_RGB = (153, 153, 153)
TEXT_RGB = (51, 51, 51)
ANSWER_RGB = (85, 85, 85)


def sanitize_latin1(text):
    text = text or ""
    for src, dst in LATIN1_REPLACEMENTS.items():
        text = text.replace(src, dst)
    return text.encode('latin-1', 'replace').decode('latin-1')


class ChecklistPDF(FPDF):
    def __init__(self, document_title, template_name=""):
        super().__init__()
        self.document_title = document_title
        self.template_name = template_name
        self.set_auto_page_break(auto=True, margin=20)
        self.set_margins(20, 20, 20)

    def footer(self):
        self.set_y(-15)
        self.set_font('Helvetica', 'I', 8)
        self.set_text_color(128)
        footer_text = f"{sanitize_latin1(self.template_name)} | Page {self.page_no()} of {{nb}}"
        self.cell(0, 10, footer_text, align='C')

    def write_block(self, text, size=10, style='', rgb=TEXT_RGB, height=5, indent=0, align='L'):
        self.set_font('Helvetica', style, size)
        self.set_text_color(*rgb)
        if indent:
            self.set_x(self.l_margin + indent)
        self.multi_cell(0, height, sanitize_latin1(text), align=align, new_x=XPos.LMARGIN, new_y=YPos.NEXT)


class PdfService:
    @staticmethod
    def render(document):
        """Renders an ExportDocument into PDF bytes."""
        current_app.logger.info(f"Rendering PDF export '{document.title}' ({document.mode})")

        pdf = ChecklistPDF(document.title, document.template_name)
        pdf.add_page()

        pdf.write_block(document.title, size=24, style='B', height=10, align='C')
        pdf.ln(4)

        for group in document.groups:
            if group.title:
                pdf.ln(4)
                pdf.write_block(group.title, size=16, style='B', height=8)

            for section in group.sections:
                pdf.ln(3)
                pdf.write_block(section.title.strip(), size=13 if document.mode == MODE_SUMMARY else 12,
                                style='B', rgb=ACCENT_RGB, height=7)

                for instance in section.instances:
                    if instance.label:
                        pdf.ln(1)
                        pdf.write_block(instance.label, size=11, style='B', rgb=ANSWER_RGB, height=6)

                    if document.mode == MODE_SUMMARY:
                        if instance.paragraph is None:
                            pdf.write_block(instance.display_paragraph, style='I', rgb=MUTED_RGB)
                        else:
                            pdf.write_block(instance.paragraph, rgb=ANSWER_RGB, align='J')
                        pdf.ln(3)
                        continue

                    for line in instance.lines:
                        pdf.ln(2)
                        pdf.write_block(line.heading, size=11, style='B')
                        if line.answer is None:
                            pdf.write_block(line.display_answer, style='I', rgb=MUTED_RGB, indent=5)
                        else:
                            pdf.write_block(line.answer, rgb=ANSWER_RGB, indent=5)

        return bytes(pdf.output())
