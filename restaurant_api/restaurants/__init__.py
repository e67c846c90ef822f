"""
Restaurant records.

Responsibilities:
- Define the restaurant document schema (address, grades, cuisine, ...).
- Build case-insensitive substring filters from optional search parameters.
- Create, read, replace, delete and search restaurant documents.
"""
