"""Loan EMI and periodic investment (SIP) calculation engines."""
