"""Attendance Ledger package.

Meeting screenshots are turned into attendance verdicts, fines and per-leader
reports. The package is organized by feature modules (matching, attendance,
fines, meetings, reports, ...) with a thin Flask controller layer on top of the
service/repository layers.
"""
