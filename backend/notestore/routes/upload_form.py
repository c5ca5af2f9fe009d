"""
NoteStore — Upload Form Page
==============================

What:  Serves a static HTML page with a form that creates a note.
Why:   Lets a person add a note from a browser without an HTTP client.
How:   The form posts note_name and note as multipart/form-data to /write.
       The page has no state of its own.
"""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter(tags=["Upload Form"])

UPLOAD_FORM_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>Upload a note</title>
</head>
<body>
    <h2>Add a new note</h2>
    <form action="/write" method="POST" enctype="multipart/form-data">
        <label for="note_name">Note name:</label>
        <input type="text" id="note_name" name="note_name" required><br>
        <label for="note">Note text:</label>
        <textarea id="note" name="note" required></textarea><br>
        <button type="submit">Save note</button>
    </form>
</body>
</html>
"""


@router.get(
    "/UploadForm.html",
    response_class=HTMLResponse,
    summary="HTML form for creating a note",
)
async def upload_form() -> HTMLResponse:
    return HTMLResponse(UPLOAD_FORM_HTML)
