"""specdoc -- parser, delta extractor and validator for spec/change documents."""

__version__ = "0.1.0"
