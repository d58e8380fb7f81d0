"""Domain layer for ledgernotes application.

Services that need a database (aliases, settings) are imported from their
own modules, so importing the entities here never pulls in the database
layer.
"""

from ledgernotes.domain.entities import JournalEntry, LedgerConfig, Posting
from ledgernotes.domain.extractor import extract_candidate_lines

__all__ = [
    "JournalEntry",
    "LedgerConfig",
    "Posting",
    "extract_candidate_lines",
]
