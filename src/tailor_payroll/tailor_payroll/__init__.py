"""Tailor Payroll package.

Payroll & compensation pipeline for the tailoring back office, organized by
feature modules (attendance, overtime, commission, tax, payroll, ...) with
SOLID service/repository layers and a thin Flask controller.
"""
