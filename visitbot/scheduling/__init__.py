"""Scheduled jobs: daily visit reminders."""
