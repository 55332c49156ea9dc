# spec_extractor/__init__.py

from .models import SpecRecord, ExtractionSession
from .pipeline import run_extraction
