"""
Document loading for resumes and job descriptions.

Plain-text files are read as UTF-8; Word documents are read with python-docx.
"""

import logging
import zipfile
from pathlib import Path

from ai_interviewer.errors import DocumentError

logger = logging.getLogger(__name__)


def _read_docx(file_path: Path) -> str:
    """
    Read text content from a .docx file.

    Args:
        file_path: Path to the .docx file.

    Returns:
        Non-empty paragraphs joined by newlines.
    """
    from docx import Document
    from docx.opc.exceptions import PackageNotFoundError

    try:
        doc = Document(str(file_path))
    except (PackageNotFoundError, zipfile.BadZipFile, KeyError) as e:
        raise DocumentError(f"Not a valid Word document: {file_path}") from e
    paragraphs = [para.text for para in doc.paragraphs if para.text.strip()]
    return "\n".join(paragraphs)


def read_document(file_path: str | Path) -> str:
    """
    Read a resume or job description from disk.

    Args:
        file_path: Path to a .docx file or any UTF-8 text file.

    Returns:
        The document text, stripped.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        DocumentError: If the file exists but cannot be read as text.
    """
    path = Path(file_path)
    if not path.is_file():
        raise FileNotFoundError(f"Document not found: {path}")

    if path.suffix.lower() == ".docx":
        text = _read_docx(path)
    else:
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise DocumentError(f"Not a UTF-8 text file: {path}") from e
        except OSError as e:
            raise DocumentError(f"Could not read {path}: {e}") from e

    logger.debug(f"Read {len(text)} chars from {path}")
    return text.strip()
