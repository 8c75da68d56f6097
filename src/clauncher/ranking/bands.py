"""Score bands shared by every result producer.

Each result category owns a fixed range so cross-source ordering stays stable
no matter how fuzzy scores are weighted.
"""

TERMINAL_COMMAND_SCORE = 20000
CLIPBOARD_ENTRY_SCORE = 15000
INTENT_SCORE = 10000
EXECUTABLE_BONUS = 2000
LAUNCHABLE_FILE_BONUS = 1000
CURATED_DEFAULT_TOP = 1000
CURATED_DEFAULT_STEP = 100
