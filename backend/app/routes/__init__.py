# Routes package init
"""
Tutorials API — API Routes Package
====================================

Route Inventory:
    - tutorials.py: GET/POST   /tutorials
                    GET        /tutorials/published
                    GET/PUT/DELETE /tutorials/{tutorial_id}
    - health.py:    GET        /health

Routes stay THIN: extract query/path/body values, call the service,
return the result. Errors are raised as exceptions and formatted by the
global handlers in main.py.
"""
