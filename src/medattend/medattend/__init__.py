"""MedAttend package.

Attendance-eligibility tracking for medical students, organized by feature
modules (subjects, history, postings, ...) with a thin Flask controller layer
on top of plain service classes.
"""
