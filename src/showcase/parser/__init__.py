"""Comment-scraping metadata extraction for component source files."""

from showcase.parser.docblock import DocBlock, find_doc_comment, parse_doc_comment, split_tags
from showcase.parser.extractor import MetadataExtractor, infer_from_content
from showcase.parser.naming import derive_id, derive_name
from showcase.parser.validator import IndexValidator

__all__ = [
    "DocBlock",
    "IndexValidator",
    "MetadataExtractor",
    "derive_id",
    "derive_name",
    "find_doc_comment",
    "infer_from_content",
    "parse_doc_comment",
    "split_tags",
]
