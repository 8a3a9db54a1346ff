# Services package init
"""
Tutorials API — Services Layer
================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
Why:   Routes handle HTTP, services handle validation, queries and error translation.

Service Inventory:
    - pagination: page/size → limit/offset, and the paged response envelope
    - TutorialService: CRUD and paged listings on Tutorial records
"""
