"""Feature modules of the journal service."""
