# Services package init
"""
Notes API — Services Layer
============================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).

Service Inventory:
    - NoteService: list / get / get-by-title / create / update / delete
"""
