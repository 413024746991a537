"""
User records: CRUD over the `users` table.
"""
