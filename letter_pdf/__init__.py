"""letter-pdf

Cursor-based layout engine for paginated business documents and DIN 5008 A
letters (invoices, delivery notes, table attachments) rendered with ReportLab.
"""

from .exceptions import LetterPdfError
from .options import GeneratorOptions
from .result import RenderResult
from .layout import DocumentGenerator, FooterOrchestrator, PageLifecycleObserver, TableSpec, wrap_lines
from .letter import Address, Letter, MetaEntry, PersonInfo, SenderInfo, letter_options
from .documents import (
    DeliveryNoteContent,
    InvoiceContent,
    TableAttachmentContent,
    delivery_note_letter,
    invoice_letter,
    table_attachment_letter,
)

__version__ = "0.1.0"

__all__ = [
    'DocumentGenerator',
    'GeneratorOptions',
    'RenderResult',
    'TableSpec',
    'FooterOrchestrator',
    'PageLifecycleObserver',
    'wrap_lines',
    'LetterPdfError',

    # Letters
    'Letter',
    'Address',
    'PersonInfo',
    'SenderInfo',
    'MetaEntry',
    'letter_options',

    # Document types
    'InvoiceContent',
    'DeliveryNoteContent',
    'TableAttachmentContent',
    'invoice_letter',
    'delivery_note_letter',
    'table_attachment_letter',
]
