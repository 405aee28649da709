"""
Insights feature module.

AI enrichment of journal entries:
- Sentiment summary for each saved entry (follow-up step after the write)
- Weekly reflection digest over the newest entries
"""
