"""
Shared fixtures for the statement parser tests.
"""
import io

import pytest
from pypdf import PdfReader, PdfWriter

from ..core.templates import load_field_spec, load_registry
from ..models.schema import FieldSpec

ICICI_LINES = [
    "ICICI Bank Credit Card Statement",
    "Card Number ending 4321",
    "Payment Due Date 05-Jan-2025",
    "Total Amount Due INR 15,250.00",
]


def _escape_pdf_text(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(lines) -> bytes:
    """Build a single-page PDF with one Helvetica text line per entry."""
    stream = "\n".join(
        f"BT /F1 14 Tf 72 {740 - 24 * i} Td ({_escape_pdf_text(line)}) Tj ET"
        for i, line in enumerate(lines)
    ).encode("latin-1")

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length " + str(len(stream)).encode() + b" >>\nstream\n" + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    pdf = b"%PDF-1.4\n"
    offsets = []
    for number, body in enumerate(objects, 1):
        offsets.append(len(pdf))
        pdf += f"{number} 0 obj\n".encode() + body + b"\nendobj\n"

    xref_offset = len(pdf)
    pdf += f"xref\n0 {len(objects) + 1}\n".encode()
    pdf += b"0000000000 65535 f \n"
    for offset in offsets:
        pdf += f"{offset:010d} 00000 n \n".encode()
    pdf += f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\n".encode()
    pdf += f"startxref\n{xref_offset}\n%%EOF\n".encode()
    return pdf


@pytest.fixture
def registry():
    return load_registry()


@pytest.fixture
def field_spec():
    return load_field_spec()


@pytest.fixture
def rules(field_spec):
    """Bundled field rules by name."""
    return {rule.name: rule for rule in field_spec}


@pytest.fixture
def four_field_spec(field_spec):
    """Bundled rules without minimumDue."""
    return FieldSpec(rules=tuple(rule for rule in field_spec if rule.name != "minimumDue"))


@pytest.fixture
def icici_text():
    return "\n".join(ICICI_LINES)


@pytest.fixture
def make_pdf():
    return build_pdf


@pytest.fixture
def icici_pdf():
    return build_pdf(ICICI_LINES)


@pytest.fixture
def encrypted_pdf(icici_pdf):
    """The ICICI statement protected with the user password "secret"."""
    reader = PdfReader(io.BytesIO(icici_pdf))
    writer = PdfWriter()
    for page in reader.pages:
        writer.add_page(page)
    writer.encrypt("secret")

    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()
