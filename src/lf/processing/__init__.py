"""Per-file processing: binary placeholders, text reading, masking and token counts."""

from lf.processing.binary import binary_placeholder, human_size, is_binary_file
from lf.processing.masking import MASK_RULES, MaskRule, mask_imports
from lf.processing.processor import FileProcessor, ProcessedFile
from lf.processing.reader import Reader, TextReader
from lf.processing.tokenizer import NullTokenCounter, TiktokenCounter, Tokenizer, make_tokenizer

__all__ = [
    "MASK_RULES",
    "FileProcessor",
    "MaskRule",
    "NullTokenCounter",
    "ProcessedFile",
    "Reader",
    "TextReader",
    "TiktokenCounter",
    "Tokenizer",
    "binary_placeholder",
    "human_size",
    "is_binary_file",
    "make_tokenizer",
    "mask_imports",
]
