import re
from collections import namedtuple

from flask import current_app

from services.document_builder import DocumentBuilder, MODE_DETAILED, MODE_SUMMARY, EXPORT_MODES
from services.docx_service import DocxService
from services.pdf_service import PdfService
from services.txt_service import TxtService

ExportResult = namedtuple('ExportResult', ['content', 'filename', 'mimetype'])

EXPORT_FORMATS = {
    'pdf': (PdfService, 'application/pdf'),
    'docx': (DocxService, 'application/vnd.openxmlformats-officedocument.wordprocessingml.document'),
    'txt': (TxtService, 'text/plain'),
}


class ExportError(Exception):
    pass


def export_filename(title, fmt, mode=MODE_DETAILED):
    # every whitespace run becomes "_", including at the ends
    base = re.sub(r'\s+', '_', title) if title and title.strip() else 'Untitled_Form'
    suffix = '_summary' if mode == MODE_SUMMARY else ''
    return f"{base}{suffix}.{fmt}"


class ExportService:
    @staticmethod
    def build_document(snapshot, template, mode=MODE_DETAILED, include_empty=True):
        return DocumentBuilder(template, mode=mode, include_empty=include_empty).build(snapshot)

    @staticmethod
    def export(fmt, mode, include_empty, snapshot, template):
        """
        Exports a snapshot in one of the supported formats.
        Raises ExportError for unsupported options or when a renderer fails,
        so no partial file ever reaches the caller.
        """
        if fmt not in EXPORT_FORMATS:
            raise ExportError(f"Unsupported export format: {fmt}")
        if mode not in EXPORT_MODES:
            raise ExportError(f"Unsupported export mode: {mode}")
        if template is None:
            raise ExportError(f"Unknown template: {snapshot.template_id}")

        renderer, mimetype = EXPORT_FORMATS[fmt]
        document = ExportService.build_document(snapshot, template, mode, include_empty)

        try:
            content = renderer.render(document)
        except Exception as e:
            current_app.logger.error(f"Export generation failed ({fmt}/{mode}): {e}")
            raise ExportError(f"Could not generate {fmt.upper()} export") from e

        return ExportResult(content, export_filename(snapshot.title, fmt, mode), mimetype)
