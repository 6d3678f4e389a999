"""
ScoBro Logbook
--------------
Personal logbook store: timestamped entries made of typed items, enriched
with tags, people and issue-tracker references, plus projects and meetings.
"""

__version__ = "1.0.0"
