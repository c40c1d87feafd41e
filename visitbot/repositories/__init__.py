"""Async data access for bills, officers, and visit reports."""
