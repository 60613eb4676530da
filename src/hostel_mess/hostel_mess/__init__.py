"""Hostel Mess package.

Feature modules (students, attendance, leaves, billing, payments) each carry a
thin Flask controller layer over service/repository layers.
"""
