# Routes package init
"""
NoteStore — API Routes Package
================================

Route Inventory:
    - notes.py:        GET/PUT/DELETE /notes/{name}, GET /notes, POST /write
    - upload_form.py:  GET /UploadForm.html  (browser form posting to /write)
    - health.py:       GET /health           (storage directory check)

Design Principle:
    Routes stay THIN. They pull data out of the request, call NoteStore and
    pick a status code. Preconditions and file I/O live in the service.
"""
