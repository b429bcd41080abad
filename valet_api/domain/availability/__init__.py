"""
Availability Domain

engine.py holds the pure slot/capacity computation; service.py loads its
inputs (settings, active rota, booking counts, holidays) through the other
domains' repositories.
"""
