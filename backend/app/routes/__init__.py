# Routes package init
"""
Notes API — API Routes Package
================================

Route Inventory:
    - notes.py:   GET    /api/notes               (list all notes)
                  GET    /api/note/{id}           (get one note)
                  GET    /api/note/read/{title}   (get one note by title)
                  POST   /api/note                (create)
                  PUT    /api/note/{id}           (overwrite)
                  DELETE /api/note/{id}           (delete)
    - health.py:  GET    /health                  (service health check)

Design Principle:
    Routes are THIN: extract the request data, call the service, pick the
    status code. Not-found and conflict decisions belong to the service.
"""
