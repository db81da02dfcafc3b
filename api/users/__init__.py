"""
User resource: create and fetch-by-id over the `users` table.
"""
