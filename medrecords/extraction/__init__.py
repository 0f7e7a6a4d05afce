from medrecords.extraction.base import BaseExtractor
from medrecords.extraction.extractor import Extractor
from medrecords.extraction.factory import ExtractorFactory

__all__ = ["BaseExtractor", "Extractor", "ExtractorFactory"]
