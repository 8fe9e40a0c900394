"""Wash Payroll package.

Feature modules (workers, attendance, settings, payroll, slips) each keep their
own model/repository/service layers; Flask controllers stay thin.
"""
