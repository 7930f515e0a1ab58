"""Exports: CSV writers and Markdown reports.

- writers.py: participant list and translated attribute list CSVs
- reports.py: translation_report.md generator
"""
