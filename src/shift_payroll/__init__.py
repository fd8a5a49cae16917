"""Shift Payroll package.

This package is organized by feature modules (shifts, organizations, members, payroll, ...)
with a thin Flask controller layer and service/repository layers holding the rules.
The payroll engine under ``payroll/`` is pure: it only sees the data passed to it.
"""
