"""Header resolver: decides which documents to classify and applies the verdict."""

import logging
from dataclasses import dataclass
from pathlib import Path

from .classifier.engine import classify
from .classifier.rules import RuleTable
from .classifier.utils import is_header_candidate
from .config import Config, FilterConfig
from .errors import truncate_text
from .models import Language, Verdict

logger = logging.getLogger("hdrlang.resolver")


@dataclass
class Document:
    """A document whose language may be reassigned."""

    path: str
    text: str
    language: Language | None = None

    @classmethod
    def from_file(cls, path: Path, language: Language | None = None) -> "Document":
        text = Path(path).read_bytes().decode("utf-8", errors="replace")
        return cls(path=str(path), text=text, language=language)


class HeaderResolver:
    """Resolves ambiguous headers to their most likely language."""

    def __init__(self, table: RuleTable, config: Config | None = None):
        self.table = table
        self.filters: FilterConfig = (config or Config()).filters

    def is_eligible(self, document: Document) -> bool:
        return is_header_candidate(
            document.path,
            suffixes=self.filters.header_suffixes,
            allow_extensionless=self.filters.allow_extensionless,
        )

    def classify(self, document: Document) -> Verdict:
        """Classify a document without applying the result."""
        text = truncate_text(document.text, self.filters.max_text_length)
        return classify(text, self.table)

    def resolve(self, document: Document) -> Language | None:
        """
        Work out a new language for the document.

        Returns the language to switch to, or None when the document is not
        eligible, nothing matched, or the verdict equals its current language.
        """
        if not self.is_eligible(document):
            logger.debug("Skipping %s: not a header candidate", document.path)
            return None

        verdict = self.classify(document)
        if verdict.language is None or verdict.language == document.language:
            return None
        return verdict.language

    def apply(self, document: Document) -> bool:
        """Reassign the document's language if something better was detected."""
        language = self.resolve(document)
        if language is None:
            return False

        logger.info(
            "Reassigning %s: %s -> %s",
            document.path,
            document.language.display_name if document.language else "none",
            language.display_name,
            extra={
                "path": document.path,
                "old_language": document.language.value if document.language else None,
                "new_language": language.value,
            },
        )
        document.language = language
        return True
