"""citation-scout: ranked PubMed citations for biomedical questions."""

__version__ = "0.1.0"
