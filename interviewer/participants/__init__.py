"""Participants: validation and CSV import of participant lists, onboarding URLs."""
