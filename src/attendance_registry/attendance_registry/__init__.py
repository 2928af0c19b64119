"""Attendance Registry package.

This package is organized by feature modules (events, participants, attendance,
notifications, ...) around a single registry service, with a thin Flask
controller layer and repository layers for in-memory and MySQL storage.
"""
