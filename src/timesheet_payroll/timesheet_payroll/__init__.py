"""Timesheet & Payroll package.

This package is organized by feature modules (worklogs, payroll, deductions,
users, announcements) with a thin Flask controller layer on top of
service/repository layers.
"""
