import logging
from pathlib import Path
from typing import Iterable, List, Optional

from .models import Document


def load_document(path: Path, encoding: str = "utf-8") -> Document:
    if not path.exists() or not path.is_file():
        raise FileNotFoundError(f"File {path} not found")

    text = path.read_text(encoding=encoding)
    logging.debug("Loaded %s (%d characters)", path, len(text))
    return Document(
        doc_id=path.stem,
        title=_derive_title(text),
        text=text,
        metadata={"source_path": str(path)},
    )


def load_documents(paths: Iterable[Path], encoding: str = "utf-8") -> List[Document]:
    return [load_document(path, encoding=encoding) for path in paths]


def _derive_title(text: str, max_length: int = 80) -> Optional[str]:
    for line in text.splitlines():
        stripped = line.strip()
        if stripped:
            return stripped[:max_length]
    return None
