"""
operations package — Declared XBRL US tasks and the public functions over them.
"""
