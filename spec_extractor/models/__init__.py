# spec_extractor/models/__init__.py

# This file makes the model classes directly available from the 'models' package.
# Instead of: from spec_extractor.models.spec_models import SpecRecord
# We can now use: from spec_extractor.models import SpecRecord

from .spec_models import SpecRecord, SPEC_FIELD_LABELS
from .session_models import ExtractionSession, OptionOutcome
