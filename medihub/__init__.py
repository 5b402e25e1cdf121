"""
MediHub - translation caching and dispatch for the hospital portals.

Every piece of UI text in the patient, hospital, lab and government portals
goes through this package so it can be shown in the user's language without
re-requesting translations or leaking stale ones across a language switch.
"""

__version__ = "0.1.0"
